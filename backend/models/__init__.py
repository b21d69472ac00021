"""
Pydantic models for DevConnect.

All data shapes defined here. No imports from db, repos, or routes.
"""

from backend.models.post import Comment, DeletedResponse, Like, Post, PostRequest
from backend.models.profile import (
    Education,
    EducationRequest,
    Experience,
    ExperienceRequest,
    Profile,
    ProfileRequest,
    SuccessResponse,
)
from backend.models.user import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    User,
    UserPublic,
    UserSummary,
)

__all__ = [
    # User models
    "User",
    "UserPublic",
    "UserSummary",
    "RegisterRequest",
    "LoginRequest",
    "LoginResponse",
    # Profile models
    "Profile",
    "Experience",
    "Education",
    "ProfileRequest",
    "ExperienceRequest",
    "EducationRequest",
    "SuccessResponse",
    # Post models
    "Post",
    "Like",
    "Comment",
    "PostRequest",
    "DeletedResponse",
]
