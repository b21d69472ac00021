"""Profile routes -- current, list, lookup, create/update, experience, education, delete."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response

from backend.auth import get_current_user
from backend.errors import Conflict, NotFound, ValidationFailed
from backend.models.profile import (
    EducationRequest,
    ExperienceRequest,
    Profile,
    ProfileRequest,
    SuccessResponse,
)
from backend.models.user import User
from backend.repos.profile_repo import HANDLE_TAKEN, ProfileRepo
from backend.repos.user_repo import UserRepo
from engine.kernel.mutations import (
    build_profile_fields,
    build_subdocument,
    insert_front,
    remove_by_id,
    update_profile,
)
from engine.kernel.types import EDUCATION_FIELDS, EXPERIENCE_FIELDS
from engine.kernel.validation import validate_education, validate_experience, validate_profile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/profile", tags=["profile"])
profile_repo = ProfileRepo()
user_repo = UserRepo()

NO_PROFILE = "There is no profile for this user"


@router.get("", status_code=200)
async def get_current_profile(user: User = Depends(get_current_user)) -> Profile:
    """Get the current user's profile."""
    profile = await profile_repo.get_for_user(user.id)
    if not profile:
        raise NotFound({"noprofile": NO_PROFILE})
    return profile


@router.get("/all", status_code=200)
async def list_profiles() -> list[Profile]:
    """List every profile. An empty store is reported as not-found."""
    profiles = await profile_repo.list_all()
    if not profiles:
        raise NotFound({"noprofile": "There are no profiles"})
    return profiles


@router.get("/handle/{handle}", status_code=200)
async def get_profile_by_handle(handle: str) -> Profile:
    profile = await profile_repo.get_by_handle(handle)
    if not profile:
        raise NotFound({"noprofile": NO_PROFILE})
    return profile


@router.get("/user/{user_id}", status_code=200)
async def get_profile_by_user(user_id: str) -> Profile:
    profile = await profile_repo.get_for_user(user_id)
    if not profile:
        raise NotFound({"noprofile": NO_PROFILE})
    return profile


@router.post("", status_code=200)
async def save_profile(
    req: ProfileRequest,
    user: User = Depends(get_current_user),
) -> Profile:
    """
    Create the current user's profile, or update it if one exists.

    Create requires handle, status and skills; update accepts any subset.
    A handle held by another user's profile is a conflict either way.
    """
    data = req.model_dump(exclude_none=True)
    existing = await profile_repo.find_for_user(user.id)

    errors = validate_profile(data, creating=existing is None)
    if errors:
        raise ValidationFailed(errors)

    fields = build_profile_fields(user.id, data)
    if "handle" in fields and await profile_repo.handle_taken(fields["handle"], user.id):
        raise Conflict("handle", HANDLE_TAKEN)

    if existing is None:
        profile = await profile_repo.create(fields)
        logger.info("Created profile %s for user %s", profile.id, user.id)
        return profile

    profile = await profile_repo.apply(user.id, lambda doc: update_profile(doc, fields))
    if not profile:
        raise NotFound({"noprofile": NO_PROFILE})
    return profile


@router.post("/experience", status_code=200)
async def add_experience(
    req: ExperienceRequest,
    user: User = Depends(get_current_user),
) -> Profile:
    """Add an experience entry to the front of the current user's profile."""
    data = req.model_dump(by_alias=True, exclude_none=True, mode="json")
    errors = validate_experience(data)
    if errors:
        raise ValidationFailed(errors)

    item = build_subdocument(data, EXPERIENCE_FIELDS)
    profile = await profile_repo.apply(user.id, lambda doc: insert_front(doc, "experience", item))
    if not profile:
        raise NotFound({"noprofile": NO_PROFILE})
    return profile


@router.post("/education", status_code=200)
async def add_education(
    req: EducationRequest,
    user: User = Depends(get_current_user),
) -> Profile:
    """Add an education entry to the front of the current user's profile."""
    data = req.model_dump(by_alias=True, exclude_none=True, mode="json")
    errors = validate_education(data)
    if errors:
        raise ValidationFailed(errors)

    item = build_subdocument(data, EDUCATION_FIELDS)
    profile = await profile_repo.apply(user.id, lambda doc: insert_front(doc, "education", item))
    if not profile:
        raise NotFound({"noprofile": NO_PROFILE})
    return profile


@router.delete("/experience/{exp_id}", status_code=200)
async def delete_experience(
    exp_id: str,
    user: User = Depends(get_current_user),
) -> Profile:
    """Remove an experience entry. An unknown id leaves the profile untouched."""
    profile = await profile_repo.apply(user.id, lambda doc: remove_by_id(doc, "experience", exp_id))
    if not profile:
        raise NotFound({"noprofile": NO_PROFILE})
    return profile


@router.delete("/education/{edu_id}", status_code=200)
async def delete_education(
    edu_id: str,
    user: User = Depends(get_current_user),
) -> Profile:
    """Remove an education entry. An unknown id leaves the profile untouched."""
    profile = await profile_repo.apply(user.id, lambda doc: remove_by_id(doc, "education", edu_id))
    if not profile:
        raise NotFound({"noprofile": NO_PROFILE})
    return profile


@router.delete("", status_code=200)
async def delete_account(
    response: Response,
    user: User = Depends(get_current_user),
) -> SuccessResponse:
    """Delete the current user's profile and then the user itself."""
    await profile_repo.delete_for_user(user.id)
    await user_repo.delete(user.id)
    response.delete_cookie("session")
    logger.info("Deleted account %s", user.id)
    return SuccessResponse()
