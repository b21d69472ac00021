"""
DevConnect Kernel -- the pure engine.

Four components:
  mutations   -- insert/remove/like rules over aggregate documents (pure)
  validation  -- field-keyed input checks (pure)
  reducer     -- (state, action) → state for the client (pure, deterministic)
  storage     -- document store protocol + in-memory and Postgres adapters
"""

from engine.kernel.mutations import (
    add_comment,
    add_like,
    insert_front,
    remove_by_id,
    remove_comment,
    remove_like,
)
from engine.kernel.reducer import initial_state, reduce, replay
from engine.kernel.storage import DocumentStore, DuplicateKeyError, MemoryStore

__all__ = [
    "insert_front",
    "remove_by_id",
    "add_like",
    "remove_like",
    "add_comment",
    "remove_comment",
    "reduce",
    "replay",
    "initial_state",
    "DocumentStore",
    "DuplicateKeyError",
    "MemoryStore",
]
