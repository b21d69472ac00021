"""
Client-side state container.

Holds the reduced client state, applies dispatched actions one at a time,
and notifies subscribers after each change. Once closed (the consumer went
away) late dispatches from still-pending requests are dropped.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Callable
from typing import Any

from engine.kernel.reducer import initial_state, reduce
from engine.kernel.types import Action

logger = logging.getLogger(__name__)

Listener = Callable[[dict[str, Any]], None]

# Recent actions kept for inspection; older ones fall off the front
HISTORY_LIMIT = 200


class ClientStore:
    """Sequential (state, action) → state container around the kernel reducer."""

    def __init__(
        self,
        state: dict[str, Any] | None = None,
        reducer: Callable[[dict[str, Any], Action], dict[str, Any]] = reduce,
    ):
        self._state = state if state is not None else initial_state()
        self._reducer = reducer
        self._lock = asyncio.Lock()
        self._listeners: list[Listener] = []
        self.closed = False
        self.history: deque[Action] = deque(maxlen=HISTORY_LIMIT)

    @property
    def state(self) -> dict[str, Any]:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def dispatch(self, action: Action) -> dict[str, Any]:
        """Apply one action. Dispatches never interleave."""
        if self.closed:
            logger.debug("Dropping %s dispatched after close", action.type)
            return self._state

        async with self._lock:
            next_state = self._reducer(self._state, action)
            self.history.append(action)
            if next_state is self._state:
                return self._state
            self._state = next_state

        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def close(self) -> None:
        self.closed = True
        self._listeners.clear()
