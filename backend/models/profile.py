"""Profile models: the profile aggregate and its nested experience/education."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.models.user import UserSummary


class Experience(BaseModel):
    """One entry in profile.experience."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    title: str
    company: str
    location: str | None = None
    from_: date = Field(alias="from")
    to: date | None = None
    current: bool = False
    description: str | None = None


class Education(BaseModel):
    """One entry in profile.education."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    school: str
    degree: str
    fieldOfStudy: str
    from_: date = Field(alias="from")
    to: date | None = None
    current: bool = False
    description: str | None = None


class Profile(BaseModel):
    """
    Core profile model. Represents a document in the profiles collection.
    `user` is the owning user's id, or the populated summary in responses.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    user: UserSummary | str
    handle: str
    company: str | None = None
    website: str | None = None
    location: str | None = None
    status: str | None = None
    bio: str | None = None
    githubUsername: str | None = None
    skills: list[str] = Field(default_factory=list)
    social: dict[str, str] = Field(default_factory=dict)
    experience: list[Experience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    date: datetime


class _BlankToNone(BaseModel):
    """Form posts send "" for untouched inputs; treat those as absent."""

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ProfileRequest(_BlankToNone):
    """What the client sends to create or update a profile. Unknown keys ignored."""

    model_config = ConfigDict(extra="ignore")

    handle: str | None = None
    company: str | None = None
    website: str | None = None
    location: str | None = None
    status: str | None = None
    bio: str | None = None
    githubUsername: str | None = None
    skills: str | list[str] | None = None
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedIn: str | None = None
    instagram: str | None = None
    # Nested form of the links above; takes precedence over the flat keys when sent
    social: dict[str, str | None] | None = None


class ExperienceRequest(_BlankToNone):
    """What the client sends to add an experience entry."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: str | None = None
    company: str | None = None
    location: str | None = None
    from_: date | None = Field(default=None, alias="from")
    to: date | None = None
    current: bool | None = None
    description: str | None = None


class EducationRequest(_BlankToNone):
    """What the client sends to add an education entry."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    school: str | None = None
    degree: str | None = None
    fieldOfStudy: str | None = None
    from_: date | None = Field(default=None, alias="from")
    to: date | None = None
    current: bool | None = None
    description: str | None = None


class SuccessResponse(BaseModel):
    success: bool = True
