"""Post routes -- list, get, create, delete, like, unlike, comment, uncomment."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from backend.auth import get_current_user
from backend.errors import NotAuthorized, NotFound, ValidationFailed
from backend.models.post import DeletedResponse, Post, PostRequest
from backend.models.user import User
from backend.repos.post_repo import PostRepo
from engine.kernel.mutations import add_comment, add_like, find_by_id, remove_comment, remove_like
from engine.kernel.validation import validate_post

router = APIRouter(prefix="/api/posts", tags=["posts"])
post_repo = PostRepo()

NO_POST = {"nopostfound": "No post found with that ID"}
NOT_AUTHORIZED = {"notauthorized": "User not authorized"}


def _author_fields(req: PostRequest, user: User) -> dict[str, Any]:
    """Request body with name/avatar defaulted to the author's own."""
    data = req.model_dump(exclude_none=True)
    data.setdefault("name", user.name)
    if user.avatar:
        data.setdefault("avatar", user.avatar)
    return data


@router.get("", status_code=200)
async def list_posts() -> list[Post]:
    """List all posts, newest first."""
    return await post_repo.list_all()


@router.get("/{post_id}", status_code=200)
async def get_post(post_id: str) -> Post:
    post = await post_repo.get(post_id)
    if not post:
        raise NotFound(NO_POST)
    return post


@router.post("", status_code=201)
async def create_post(
    req: PostRequest | None = None,
    user: User = Depends(get_current_user),
) -> Post:
    req = req or PostRequest()
    errors = validate_post(req.model_dump())
    if errors:
        raise ValidationFailed(errors)
    return await post_repo.create(user.id, _author_fields(req, user))


@router.delete("/{post_id}", status_code=200)
async def delete_post(
    post_id: str,
    user: User = Depends(get_current_user),
) -> DeletedResponse:
    """Delete a post. Only its author may do so."""
    doc = await post_repo.get_document(post_id)
    if not doc:
        raise NotFound(NO_POST)
    if str(doc["user"]) != user.id:
        raise NotAuthorized(NOT_AUTHORIZED)

    await post_repo.delete(post_id)
    return DeletedResponse(id=post_id)


@router.post("/like/{post_id}", status_code=200)
async def like_post(
    post_id: str,
    user: User = Depends(get_current_user),
) -> Post:
    """Like a post. Liking again is a no-op; a user holds at most one like."""
    post = await post_repo.apply(post_id, lambda doc: add_like(doc, user.id))
    if not post:
        raise NotFound(NO_POST)
    return post


@router.delete("/like/{post_id}", status_code=200)
async def unlike_post(
    post_id: str,
    user: User = Depends(get_current_user),
) -> Post:
    post = await post_repo.apply(post_id, lambda doc: remove_like(doc, user.id))
    if not post:
        raise NotFound(NO_POST)
    return post


@router.post("/comment/{post_id}", status_code=200)
async def comment_on_post(
    post_id: str,
    req: PostRequest | None = None,
    user: User = Depends(get_current_user),
) -> Post:
    """Add a comment to the front of a post's comments."""
    req = req or PostRequest()
    errors = validate_post(req.model_dump())
    if errors:
        raise ValidationFailed(errors)

    data = _author_fields(req, user)
    post = await post_repo.apply(post_id, lambda doc: add_comment(doc, user.id, data))
    if not post:
        raise NotFound(NO_POST)
    return post


@router.delete("/comment/{post_id}/{comment_id}", status_code=200)
async def delete_comment(
    post_id: str,
    comment_id: str,
    user: User = Depends(get_current_user),
) -> Post:
    """Remove a comment. Allowed for the comment's author or the post's author."""
    doc = await post_repo.get_document(post_id)
    if not doc:
        raise NotFound(NO_POST)

    comment = find_by_id(doc.get("comments", []), comment_id)
    if not comment:
        raise NotFound({"commentnotexists": "Comment does not exist"})
    if user.id not in (str(comment.get("user")), str(doc["user"])):
        raise NotAuthorized(NOT_AUTHORIZED)

    post = await post_repo.apply(post_id, lambda d: remove_comment(d, comment_id))
    if not post:
        raise NotFound(NO_POST)
    return post
