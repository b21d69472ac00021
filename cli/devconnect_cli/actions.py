"""
Sync actions: run one remote operation and feed the result to the store.

Every operation follows the same shape:

  - list/get reads dispatch a loading action first, then the data action.
    A failed read dispatches the data action with payload None so the
    slice records the failure instead of staying in loading.
  - writes dispatch their data action on success and GET_ERRORS with the
    server's field-keyed errors on failure.
  - create/like/comment clear stale errors before applying a success.

Each method returns the server payload on success and None on failure;
the failure details live in the store's `errors` slice.
"""

from __future__ import annotations

import logging
from typing import Any

import jwt

from devconnect_cli.client import ApiClient, ApiError
from devconnect_cli.state import ClientStore
from engine.kernel import events
from engine.kernel.events import errors_action, make_action

logger = logging.getLogger(__name__)


def decode_token(token: str) -> dict[str, Any]:
    """
    Read the claims of a session token.

    The signature is not checked here; the server checks it on every request.
    """
    claims = jwt.decode(token.removeprefix("Bearer "), options={"verify_signature": False})
    return {
        "id": claims.get("sub"),
        "name": claims.get("name"),
        "avatar": claims.get("avatar"),
        "exp": claims.get("exp"),
    }


class SyncActions:
    """Remote operations bound to one API client and one client store."""

    def __init__(self, client: ApiClient, store: ClientStore):
        self.client = client
        self.store = store

    async def _fail(self, e: ApiError) -> None:
        logger.debug("Request failed (%s): %s", e.status_code, e.errors)
        await self.store.dispatch(errors_action(e.errors))

    # -- auth ---------------------------------------------------------------

    async def register_user(self, data: dict) -> dict | None:
        try:
            user = await self.client.register(data)
        except ApiError as e:
            await self._fail(e)
            return None
        await self.store.dispatch(make_action(events.CLEAR_ERRORS))
        return user

    async def login_user(self, data: dict) -> dict | None:
        """Log in and set the current user from the issued token's claims."""
        try:
            res = await self.client.login(data)
        except ApiError as e:
            await self._fail(e)
            return None

        user = decode_token(res["token"])
        await self.store.dispatch(make_action(events.CLEAR_ERRORS))
        await self.store.dispatch(make_action(events.SET_CURRENT_USER, user))
        return user

    async def set_current_user(self, token: str) -> dict:
        """Restore the current user from a saved token without a round-trip."""
        self.client.token = token.removeprefix("Bearer ")
        user = decode_token(token)
        await self.store.dispatch(make_action(events.SET_CURRENT_USER, user))
        return user

    async def logout_user(self) -> None:
        try:
            await self.client.logout()
        except ApiError as e:
            # Local session is dropped either way.
            logger.debug("Logout request failed: %s", e.errors)
            self.client.token = None
        await self.store.dispatch(make_action(events.CLEAR_CURRENT_PROFILE))
        await self.store.dispatch(make_action(events.SET_CURRENT_USER, {}))

    # -- posts --------------------------------------------------------------

    async def get_posts(self) -> list[dict] | None:
        await self.store.dispatch(make_action(events.POST_LOADING))
        try:
            posts = await self.client.list_posts()
        except ApiError:
            await self.store.dispatch(make_action(events.GET_POSTS, None))
            return None
        await self.store.dispatch(make_action(events.GET_POSTS, posts))
        return posts

    async def get_post(self, post_id: str) -> dict | None:
        await self.store.dispatch(make_action(events.POST_LOADING))
        try:
            post = await self.client.get_post(post_id)
        except ApiError:
            await self.store.dispatch(make_action(events.GET_POST, None))
            return None
        await self.store.dispatch(make_action(events.GET_POST, post))
        return post

    async def add_post(self, data: dict) -> dict | None:
        try:
            post = await self.client.create_post(data)
        except ApiError as e:
            await self._fail(e)
            return None
        await self.store.dispatch(make_action(events.CLEAR_ERRORS))
        await self.store.dispatch(make_action(events.ADD_POST, post))
        return post

    async def delete_post(self, post_id: str) -> dict | None:
        try:
            res = await self.client.delete_post(post_id)
        except ApiError as e:
            await self._fail(e)
            return None
        await self.store.dispatch(make_action(events.DELETE_POST, res.get("_id", post_id)))
        return res

    async def add_like(self, post_id: str) -> dict | None:
        try:
            post = await self.client.like_post(post_id)
        except ApiError as e:
            await self._fail(e)
            return None
        await self.store.dispatch(make_action(events.CLEAR_ERRORS))
        await self.store.dispatch(make_action(events.UPDATE_LIKES, post))
        return post

    async def remove_like(self, post_id: str) -> dict | None:
        try:
            post = await self.client.unlike_post(post_id)
        except ApiError as e:
            await self._fail(e)
            return None
        await self.store.dispatch(make_action(events.UPDATE_LIKES, post))
        return post

    async def add_comment(self, post_id: str, data: dict) -> dict | None:
        try:
            post = await self.client.add_comment(post_id, data)
        except ApiError as e:
            await self._fail(e)
            return None
        await self.store.dispatch(make_action(events.CLEAR_ERRORS))
        await self.store.dispatch(make_action(events.GET_POST, post))
        return post

    async def delete_comment(self, post_id: str, comment_id: str) -> dict | None:
        try:
            post = await self.client.delete_comment(post_id, comment_id)
        except ApiError as e:
            await self._fail(e)
            return None
        await self.store.dispatch(make_action(events.GET_POST, post))
        return post

    # -- profiles -----------------------------------------------------------

    async def get_current_profile(self) -> dict | None:
        await self.store.dispatch(make_action(events.PROFILE_LOADING))
        try:
            profile = await self.client.get_current_profile()
        except ApiError:
            await self.store.dispatch(make_action(events.GET_PROFILE, None))
            return None
        await self.store.dispatch(make_action(events.GET_PROFILE, profile))
        return profile

    async def get_profile_by_handle(self, handle: str) -> dict | None:
        await self.store.dispatch(make_action(events.PROFILE_LOADING))
        try:
            profile = await self.client.get_profile_by_handle(handle)
        except ApiError:
            await self.store.dispatch(make_action(events.GET_PROFILE, None))
            return None
        await self.store.dispatch(make_action(events.GET_PROFILE, profile))
        return profile

    async def get_profiles(self) -> list[dict] | None:
        await self.store.dispatch(make_action(events.PROFILE_LOADING))
        try:
            profiles = await self.client.list_profiles()
        except ApiError:
            await self.store.dispatch(make_action(events.GET_PROFILES, None))
            return None
        await self.store.dispatch(make_action(events.GET_PROFILES, profiles))
        return profiles

    async def save_profile(self, data: dict) -> dict | None:
        """Create or update the current user's profile."""
        try:
            profile = await self.client.save_profile(data)
        except ApiError as e:
            await self._fail(e)
            return None
        await self.store.dispatch(make_action(events.CLEAR_ERRORS))
        await self.store.dispatch(make_action(events.GET_PROFILE, profile))
        return profile

    async def add_experience(self, data: dict) -> dict | None:
        try:
            profile = await self.client.add_experience(data)
        except ApiError as e:
            await self._fail(e)
            return None
        await self.store.dispatch(make_action(events.CLEAR_ERRORS))
        await self.store.dispatch(make_action(events.GET_PROFILE, profile))
        return profile

    async def add_education(self, data: dict) -> dict | None:
        try:
            profile = await self.client.add_education(data)
        except ApiError as e:
            await self._fail(e)
            return None
        await self.store.dispatch(make_action(events.CLEAR_ERRORS))
        await self.store.dispatch(make_action(events.GET_PROFILE, profile))
        return profile

    async def delete_experience(self, exp_id: str) -> dict | None:
        try:
            profile = await self.client.delete_experience(exp_id)
        except ApiError as e:
            await self._fail(e)
            return None
        await self.store.dispatch(make_action(events.GET_PROFILE, profile))
        return profile

    async def delete_education(self, edu_id: str) -> dict | None:
        try:
            profile = await self.client.delete_education(edu_id)
        except ApiError as e:
            await self._fail(e)
            return None
        await self.store.dispatch(make_action(events.GET_PROFILE, profile))
        return profile

    async def delete_account(self) -> bool:
        """Delete the profile and the user, then drop the local session."""
        try:
            await self.client.delete_account()
        except ApiError as e:
            await self._fail(e)
            return False
        await self.store.dispatch(make_action(events.CLEAR_CURRENT_PROFILE))
        await self.store.dispatch(make_action(events.SET_CURRENT_USER, {}))
        return True
