"""Post models: the post aggregate with its likes and comments."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Like(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    user: str


class Comment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    user: str
    text: str
    name: str | None = None
    avatar: str | None = None
    handle: str | None = None
    date: datetime


class Post(BaseModel):
    """Core post model. Represents a document in the posts collection."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    user: str
    text: str
    name: str | None = None
    avatar: str | None = None
    handle: str | None = None
    likes: list[Like] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)
    date: datetime


class PostRequest(BaseModel):
    """
    What the client sends to create a post or a comment.
    name/avatar default to the author's own when omitted.
    """

    model_config = ConfigDict(extra="ignore")

    text: str | None = None
    name: str | None = None
    avatar: str | None = None
    handle: str | None = None


class DeletedResponse(BaseModel):
    """Identifier of the aggregate that was removed."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
