"""
DevConnect Kernel -- Input Validation

Validates raw request payloads before they reach the mutation layer.
Every validator returns a field-keyed error mapping. Empty dict = valid.

Validation is structural (present? well-formed? within length?), not
semantic. Uniqueness of email and handle is checked against the store by
the repositories.
"""

from __future__ import annotations

from typing import Any

from email_validator import EmailNotValidError, validate_email
from pydantic import HttpUrl, TypeAdapter, ValidationError

from engine.kernel.types import SOCIAL_FIELDS

_URL = TypeAdapter(HttpUrl)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_register(data: dict[str, Any]) -> dict[str, str]:
    errors: dict[str, str] = {}
    name = _text(data, "name")
    email = _text(data, "email")
    password = _text(data, "password")
    password2 = _text(data, "password2")

    if not _length_between(name, 2, 30):
        errors["name"] = "Name must be between 2 and 30 characters"
    if not name:
        errors["name"] = "Name field is required"

    if not _is_email(email):
        errors["email"] = "Email is invalid"
    if not email:
        errors["email"] = "Email field is required"

    if not _length_between(password, 6, 30):
        errors["password"] = "Password must be between 6 and 30 characters"
    if not password:
        errors["password"] = "Password field is required"

    if password != password2:
        errors["password2"] = "Passwords must match"
    if not password2:
        errors["password2"] = "Confirm Password field is required"

    return errors


def validate_login(data: dict[str, Any]) -> dict[str, str]:
    errors: dict[str, str] = {}
    email = _text(data, "email")
    password = _text(data, "password")

    if not _is_email(email):
        errors["email"] = "Email is invalid"
    if not email:
        errors["email"] = "Email field is required"
    if not password:
        errors["password"] = "Password field is required"

    return errors


def validate_profile(data: dict[str, Any], *, creating: bool = True) -> dict[str, str]:
    """
    Validate profile input.

    On create, handle, status and skills are required. On update every
    field is optional, but whatever is supplied must still be well-formed.
    """
    errors: dict[str, str] = {}
    handle = _text(data, "handle")
    status = _text(data, "status")
    skills = data.get("skills")

    if handle and not _length_between(handle, 2, 40):
        errors["handle"] = "Handle needs to be between 2 and 40 characters"

    if creating:
        if not handle:
            errors["handle"] = "Profile handle is required"
        if not status:
            errors["status"] = "Status field is required"
        if not skills:
            errors["skills"] = "Skills field is required"

    website = _text(data, "website")
    if website and not _is_url(website):
        errors["website"] = "Not a valid URL"

    social = data.get("social") if isinstance(data.get("social"), dict) else data
    for key in SOCIAL_FIELDS:
        value = _text(social, key)
        if value and not _is_url(value):
            errors[key] = "Not a valid URL"

    return errors


def validate_experience(data: dict[str, Any]) -> dict[str, str]:
    errors: dict[str, str] = {}
    if not _text(data, "title"):
        errors["title"] = "Job title field is required"
    if not _text(data, "company"):
        errors["company"] = "Company field is required"
    if not _text(data, "from"):
        errors["from"] = "From date field is required"
    return errors


def validate_education(data: dict[str, Any]) -> dict[str, str]:
    errors: dict[str, str] = {}
    if not _text(data, "school"):
        errors["school"] = "School field is required"
    if not _text(data, "degree"):
        errors["degree"] = "Degree field is required"
    if not _text(data, "fieldOfStudy"):
        errors["fieldOfStudy"] = "Field of study field is required"
    if not _text(data, "from"):
        errors["from"] = "From date field is required"
    return errors


def validate_post(data: dict[str, Any]) -> dict[str, str]:
    """Posts and comments share the same text rule."""
    errors: dict[str, str] = {}
    text = _text(data, "text")
    if not _length_between(text, 10, 300):
        errors["text"] = "Post must be between 10 and 300 characters"
    if not text:
        errors["text"] = "Text field is required"
    return errors


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _text(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    return str(value).strip()


def _length_between(value: str, low: int, high: int) -> bool:
    return low <= len(value) <= high


def _is_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _is_url(value: str) -> bool:
    candidate = value if "://" in value else f"http://{value}"
    try:
        _URL.validate_python(candidate)
    except ValidationError:
        return False
    return "." in candidate.split("://", 1)[1].split("/", 1)[0]
