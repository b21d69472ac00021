"""HTTP client for the DevConnect API."""

from __future__ import annotations

from typing import Any

import httpx


class ApiError(Exception):
    """
    A failed remote operation.

    `errors` is the server's field-keyed mapping for validation/conflict
    failures, or {"message": ...} for not-found, server and network errors.
    """

    def __init__(self, status_code: int, errors: dict[str, Any]):
        super().__init__(f"{status_code}: {errors}")
        self.status_code = status_code
        self.errors = errors


class ApiClient:
    """Async HTTP client for the DevConnect API. One method per remote operation."""

    def __init__(
        self,
        api_url: str,
        token: str | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.token = token
        self.client = httpx.AsyncClient(base_url=self.api_url, timeout=timeout, transport=transport)

    def _headers(self) -> dict:
        """Build request headers."""
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def request(self, method: str, path: str, data: dict | None = None) -> Any:
        """
        Make a request and return the decoded JSON body.

        Raises:
            ApiError: On any non-2xx response or transport failure
        """
        try:
            res = await self.client.request(method, path, json=data, headers=self._headers())
        except httpx.HTTPError as e:
            raise ApiError(0, {"message": "Network error"}) from e

        if res.is_error:
            try:
                body = res.json()
            except ValueError:
                body = None
            if not isinstance(body, dict):
                body = {"message": res.reason_phrase or "Request failed"}
            raise ApiError(res.status_code, body)

        return res.json()

    async def get(self, path: str) -> Any:
        return await self.request("GET", path)

    async def post(self, path: str, data: dict | None = None) -> Any:
        return await self.request("POST", path, data or {})

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    # -- users --------------------------------------------------------------

    async def register(self, data: dict) -> dict:
        return await self.post("/api/users/register", data)

    async def login(self, data: dict) -> dict:
        """
        Log in and keep the issued token for later requests.

        Returns {"success": true, "token": "Bearer ..."}
        """
        res = await self.post("/api/users/login", data)
        self.token = res["token"].removeprefix("Bearer ")
        return res

    async def logout(self) -> dict:
        res = await self.post("/api/users/logout")
        self.token = None
        return res

    async def current_user(self) -> dict:
        return await self.get("/api/users/current")

    # -- posts --------------------------------------------------------------

    async def list_posts(self) -> list[dict]:
        return await self.get("/api/posts")

    async def get_post(self, post_id: str) -> dict:
        return await self.get(f"/api/posts/{post_id}")

    async def create_post(self, data: dict) -> dict:
        return await self.post("/api/posts", data)

    async def delete_post(self, post_id: str) -> dict:
        """Returns {"_id": post_id}."""
        return await self.delete(f"/api/posts/{post_id}")

    async def like_post(self, post_id: str) -> dict:
        return await self.post(f"/api/posts/like/{post_id}")

    async def unlike_post(self, post_id: str) -> dict:
        return await self.delete(f"/api/posts/like/{post_id}")

    async def add_comment(self, post_id: str, data: dict) -> dict:
        return await self.post(f"/api/posts/comment/{post_id}", data)

    async def delete_comment(self, post_id: str, comment_id: str) -> dict:
        return await self.delete(f"/api/posts/comment/{post_id}/{comment_id}")

    # -- profiles -----------------------------------------------------------

    async def get_current_profile(self) -> dict:
        return await self.get("/api/profile")

    async def list_profiles(self) -> list[dict]:
        return await self.get("/api/profile/all")

    async def get_profile_by_handle(self, handle: str) -> dict:
        return await self.get(f"/api/profile/handle/{handle}")

    async def get_profile_by_user(self, user_id: str) -> dict:
        return await self.get(f"/api/profile/user/{user_id}")

    async def save_profile(self, data: dict) -> dict:
        return await self.post("/api/profile", data)

    async def add_experience(self, data: dict) -> dict:
        return await self.post("/api/profile/experience", data)

    async def delete_experience(self, exp_id: str) -> dict:
        return await self.delete(f"/api/profile/experience/{exp_id}")

    async def add_education(self, data: dict) -> dict:
        return await self.post("/api/profile/education", data)

    async def delete_education(self, edu_id: str) -> dict:
        return await self.delete(f"/api/profile/education/{edu_id}")

    async def delete_account(self) -> dict:
        res = await self.delete("/api/profile")
        self.token = None
        return res

    async def close(self):
        """Close client."""
        await self.client.aclose()
