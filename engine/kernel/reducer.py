"""
DevConnect Kernel -- Client State Reducer

Pure function: (state, action) → state
No side effects. No IO. Deterministic.

The client state is a dict of slices:

  auth     {"is_authenticated": bool, "user": dict}
  post     {"posts": list, "post": dict | None, "status": RequestStatus}
  profile  {"profile": dict | None, "profiles": list, "status": RequestStatus}
  errors   field-keyed error mapping from the last failed request

Insert/replace/remove rules mirror the server's aggregate mutations, so
the local copy stays consistent with what the API would return next.
An action that no slice handles returns the input state object itself.
"""

from __future__ import annotations

import copy
from typing import Any

from engine.kernel import events
from engine.kernel.mutations import exclude_by_id, replace_by_id
from engine.kernel.types import Action, RequestStatus

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def initial_state() -> dict[str, Any]:
    """The client state before any action has been dispatched."""
    return {
        "auth": {"is_authenticated": False, "user": {}},
        "post": {"posts": [], "post": None, "status": RequestStatus.IDLE},
        "profile": {"profile": None, "profiles": [], "status": RequestStatus.IDLE},
        "errors": {},
    }


def reduce(state: dict[str, Any], action: Action) -> dict[str, Any]:
    """
    Apply one action to the client state.

    The input state is never modified. Slices the action does not touch are
    shared (same object) between input and output.
    """
    changed = False
    next_state = dict(state)
    for name, slice_reducer in _SLICES.items():
        current = state.get(name)
        updated = slice_reducer(current, action)
        if updated is not current:
            next_state[name] = updated
            changed = True
    return next_state if changed else state


def replay(actions: list[Action]) -> dict[str, Any]:
    """
    Rebuild state from scratch by reducing over all actions.
    replay(actions) == reduce(reduce(initial_state(), a1), a2)...
    """
    state = initial_state()
    for action in actions:
        state = reduce(state, action)
    return state


def is_loading(slice_state: dict[str, Any]) -> bool:
    return slice_state.get("status") == RequestStatus.LOADING


# ---------------------------------------------------------------------------
# Slice reducers
# ---------------------------------------------------------------------------


def reduce_post(state: dict[str, Any] | None, action: Action) -> dict[str, Any]:
    if state is None:
        state = initial_state()["post"]

    if action.type == events.POST_LOADING:
        return {**state, "status": RequestStatus.LOADING}

    if action.type == events.GET_POSTS:
        if action.payload is None:
            return {**state, "posts": [], "status": RequestStatus.FAILED}
        return {**state, "posts": _copy(action.payload), "status": RequestStatus.LOADED}

    if action.type == events.GET_POST:
        status = RequestStatus.FAILED if action.payload is None else RequestStatus.LOADED
        return {**state, "post": _copy(action.payload), "status": status}

    if action.type == events.ADD_POST:
        return {**state, "posts": [_copy(action.payload), *state["posts"]]}

    if action.type == events.DELETE_POST:
        return {**state, "posts": exclude_by_id(state["posts"], action.payload)}

    if action.type == events.UPDATE_LIKES:
        return {**state, "posts": replace_by_id(state["posts"], _copy(action.payload))}

    return state


def reduce_profile(state: dict[str, Any] | None, action: Action) -> dict[str, Any]:
    if state is None:
        state = initial_state()["profile"]

    if action.type == events.PROFILE_LOADING:
        return {**state, "status": RequestStatus.LOADING}

    if action.type == events.GET_PROFILE:
        status = RequestStatus.FAILED if action.payload is None else RequestStatus.LOADED
        return {**state, "profile": _copy(action.payload), "status": status}

    if action.type == events.GET_PROFILES:
        if action.payload is None:
            return {**state, "profiles": [], "status": RequestStatus.FAILED}
        return {**state, "profiles": _copy(action.payload), "status": RequestStatus.LOADED}

    if action.type == events.CLEAR_CURRENT_PROFILE:
        return {**state, "profile": None, "status": RequestStatus.IDLE}

    return state


def reduce_auth(state: dict[str, Any] | None, action: Action) -> dict[str, Any]:
    if state is None:
        state = initial_state()["auth"]

    if action.type == events.SET_CURRENT_USER:
        user = _copy(action.payload) or {}
        return {**state, "is_authenticated": bool(user), "user": user}

    return state


def reduce_errors(state: dict[str, Any] | None, action: Action) -> dict[str, Any]:
    if state is None:
        state = {}

    if action.type == events.GET_ERRORS:
        return _copy(action.payload) or {}

    if action.type == events.CLEAR_ERRORS:
        return {} if state else state

    return state


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _copy(payload: Any) -> Any:
    # Payloads come straight off the wire; the state must not alias them.
    return copy.deepcopy(payload)


_SLICES: dict[str, Any] = {
    "auth": reduce_auth,
    "post": reduce_post,
    "profile": reduce_profile,
    "errors": reduce_errors,
}
