"""
DevConnect Kernel -- Action Construction

Action type names and factory functions for building well-formed actions.
Used by the sync client to wrap server results before feeding them to the
reducer, and by tests to build actions concisely.
"""

from __future__ import annotations

from typing import Any

from engine.kernel.types import Action

# Post slice
POST_LOADING = "POST_LOADING"
GET_POSTS = "GET_POSTS"
GET_POST = "GET_POST"
ADD_POST = "ADD_POST"
DELETE_POST = "DELETE_POST"
UPDATE_LIKES = "UPDATE_LIKES"

# Profile slice
PROFILE_LOADING = "PROFILE_LOADING"
GET_PROFILE = "GET_PROFILE"
GET_PROFILES = "GET_PROFILES"
CLEAR_CURRENT_PROFILE = "CLEAR_CURRENT_PROFILE"

# Auth slice
SET_CURRENT_USER = "SET_CURRENT_USER"

# Errors slice
GET_ERRORS = "GET_ERRORS"
CLEAR_ERRORS = "CLEAR_ERRORS"

ACTION_TYPES: set[str] = {
    POST_LOADING,
    GET_POSTS,
    GET_POST,
    ADD_POST,
    DELETE_POST,
    UPDATE_LIKES,
    PROFILE_LOADING,
    GET_PROFILE,
    GET_PROFILES,
    CLEAR_CURRENT_PROFILE,
    SET_CURRENT_USER,
    GET_ERRORS,
    CLEAR_ERRORS,
}


def make_action(type: str, payload: Any = None, **meta: Any) -> Action:
    """
    Build an Action from a type and optional payload.

    Extra keyword arguments land in `meta` (e.g. the request path that
    produced the payload); the reducer ignores them.
    """
    return Action(type=type, payload=payload, meta=meta)


def errors_action(errors: dict[str, Any]) -> Action:
    """GET_ERRORS carrying a field-keyed error mapping."""
    return make_action(GET_ERRORS, errors or {})
