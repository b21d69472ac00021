"""
API error taxonomy.

Route handlers and repositories raise these; backend.main converts them
into JSON responses whose body is the field-keyed `errors` mapping.
Anything else that escapes a handler is logged and reported as a generic
500 so internal error shapes never reach the client.
"""

from __future__ import annotations

from fastapi import status


class ApiError(Exception):
    """Base class. `errors` is the response body."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: dict[str, str]):
        super().__init__(errors)
        self.errors = errors


class ValidationFailed(ApiError):
    """Input failed its schema. One message per offending field."""


class Conflict(ApiError):
    """A uniqueness rule (email, handle) would be violated."""

    def __init__(self, field: str, message: str):
        super().__init__({field: message})
        self.field = field


class NotFound(ApiError):
    """The requested aggregate (or its parent) does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class CredentialError(ApiError):
    """Password did not match."""


class NotAuthorized(ApiError):
    """Authenticated, but not allowed to touch this aggregate."""

    status_code = status.HTTP_401_UNAUTHORIZED


class Unauthenticated(ApiError):
    """No valid session."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Not authenticated. Please sign in."):
        super().__init__({"message": message})
