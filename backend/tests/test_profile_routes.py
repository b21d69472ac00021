"""Integration tests for /api/profile routes."""

from __future__ import annotations

import pytest

from engine.kernel.types import PROFILES, USERS

pytestmark = pytest.mark.asyncio

PROFILE = {
    "handle": "jdoe",
    "status": "Developer",
    "skills": "python, sql, fastapi",
    "company": "Acme",
    "website": "https://jdoe.dev",
    "twitter": "https://twitter.com/jdoe",
}

EXPERIENCE = {"title": "Backend Engineer", "company": "Acme", "from": "2020-01-01", "current": True}
EDUCATION = {"school": "MIT", "degree": "BSc", "fieldOfStudy": "Computer Science", "from": "2012-09-01"}


async def _create_profile(client, user, **overrides) -> dict:
    res = await client.post("/api/profile", json={**PROFILE, **overrides}, headers=user["headers"])
    assert res.status_code == 200, res.text
    return res.json()


class TestCurrentProfile:
    """GET /api/profile"""

    async def test_requires_auth(self, async_client):
        res = await async_client.get("/api/profile")
        assert res.status_code == 401

    async def test_no_profile(self, async_client, test_user):
        res = await async_client.get("/api/profile", headers=test_user["headers"])
        assert res.status_code == 404
        assert res.json() == {"noprofile": "There is no profile for this user"}

    async def test_populated_user(self, async_client, test_user):
        await _create_profile(async_client, test_user)
        res = await async_client.get("/api/profile", headers=test_user["headers"])
        assert res.status_code == 200
        assert res.json()["user"]["_id"] == test_user["id"]
        assert res.json()["user"]["name"] == "Jane Doe"


class TestSaveProfile:
    """POST /api/profile"""

    async def test_create(self, async_client, test_user):
        data = await _create_profile(async_client, test_user)
        assert data["handle"] == "jdoe"
        assert data["skills"] == ["python", "sql", "fastapi"]
        assert data["social"] == {"twitter": "https://twitter.com/jdoe"}
        assert data["experience"] == []
        assert data["education"] == []

    async def test_create_requires_fields(self, async_client, test_user, memory_store):
        res = await async_client.post("/api/profile", json={"bio": "hi"}, headers=test_user["headers"])
        assert res.status_code == 400
        assert res.json() == {
            "handle": "Profile handle is required",
            "status": "Status field is required",
            "skills": "Skills field is required",
        }
        assert await memory_store.find(PROFILES) == []

    async def test_invalid_url(self, async_client, test_user):
        res = await async_client.post(
            "/api/profile", json={**PROFILE, "website": "nope"}, headers=test_user["headers"]
        )
        assert res.status_code == 400
        assert res.json() == {"website": "Not a valid URL"}

    async def test_update_subset(self, async_client, test_user):
        created = await _create_profile(async_client, test_user)
        res = await async_client.post("/api/profile", json={"bio": "Hello there"}, headers=test_user["headers"])
        assert res.status_code == 200
        data = res.json()
        assert data["_id"] == created["_id"]
        assert data["bio"] == "Hello there"
        assert data["handle"] == "jdoe"
        assert data["skills"] == created["skills"]

    async def test_update_keeps_experience(self, async_client, test_user):
        await _create_profile(async_client, test_user)
        await async_client.post("/api/profile/experience", json=EXPERIENCE, headers=test_user["headers"])
        res = await async_client.post("/api/profile", json={"status": "Lead"}, headers=test_user["headers"])
        assert len(res.json()["experience"]) == 1

    async def test_handle_taken_by_another_user(self, async_client, test_user, second_user, memory_store):
        await _create_profile(async_client, test_user)
        writes = memory_store.write_count

        res = await async_client.post("/api/profile", json=PROFILE, headers=second_user["headers"])
        assert res.status_code == 400
        assert res.json() == {"handle": "That handle already exists"}
        assert memory_store.write_count == writes
        assert await memory_store.find(PROFILES, {"user": second_user["id"]}) == []

    async def test_update_handle_to_taken(self, async_client, test_user, second_user, memory_store):
        await _create_profile(async_client, test_user)
        await _create_profile(async_client, second_user, handle="jsmith")
        writes = memory_store.write_count

        res = await async_client.post("/api/profile", json={"handle": "jdoe"}, headers=second_user["headers"])
        assert res.status_code == 400
        assert res.json() == {"handle": "That handle already exists"}
        assert memory_store.write_count == writes

    async def test_resubmitting_own_handle(self, async_client, test_user):
        await _create_profile(async_client, test_user)
        res = await async_client.post("/api/profile", json=PROFILE, headers=test_user["headers"])
        assert res.status_code == 200

    async def test_padded_handle_is_trimmed(self, async_client, test_user, second_user):
        data = await _create_profile(async_client, test_user, handle="  jdoe ")
        assert data["handle"] == "jdoe"

        res = await async_client.post(
            "/api/profile", json={**PROFILE, "handle": " jdoe "}, headers=second_user["headers"]
        )
        assert res.status_code == 400
        assert res.json() == {"handle": "That handle already exists"}

        res = await async_client.get("/api/profile/handle/jdoe")
        assert res.json()["user"]["_id"] == test_user["id"]

    async def test_nested_social_links(self, async_client, test_user):
        body = {"handle": "jdoe", "status": "Dev", "skills": "py", "social": {"twitter": "https://twitter.com/jdoe"}}
        res = await async_client.post("/api/profile", json=body, headers=test_user["headers"])
        assert res.status_code == 200
        assert res.json()["social"] == {"twitter": "https://twitter.com/jdoe"}

    async def test_nested_social_links_are_url_checked(self, async_client, test_user, memory_store):
        writes = memory_store.write_count
        body = {"handle": "jdoe", "status": "Dev", "skills": "py", "social": {"youtube": "notaurl"}}
        res = await async_client.post("/api/profile", json=body, headers=test_user["headers"])
        assert res.status_code == 400
        assert res.json() == {"youtube": "Not a valid URL"}
        assert memory_store.write_count == writes


class TestProfileLookup:
    """GET /api/profile/all, /handle/{handle}, /user/{user_id}"""

    async def test_all_empty(self, async_client):
        res = await async_client.get("/api/profile/all")
        assert res.status_code == 404
        assert res.json() == {"noprofile": "There are no profiles"}

    async def test_all(self, async_client, test_user, second_user):
        await _create_profile(async_client, test_user)
        await _create_profile(async_client, second_user, handle="jsmith")
        res = await async_client.get("/api/profile/all")
        assert res.status_code == 200
        assert {p["handle"] for p in res.json()} == {"jdoe", "jsmith"}
        assert {p["user"]["name"] for p in res.json()} == {"Jane Doe", "John Smith"}

    async def test_by_handle(self, async_client, test_user):
        await _create_profile(async_client, test_user)
        res = await async_client.get("/api/profile/handle/jdoe")
        assert res.status_code == 200
        assert res.json()["user"]["_id"] == test_user["id"]

    async def test_by_handle_missing(self, async_client):
        res = await async_client.get("/api/profile/handle/nobody")
        assert res.status_code == 404

    async def test_by_user(self, async_client, test_user):
        await _create_profile(async_client, test_user)
        res = await async_client.get(f"/api/profile/user/{test_user['id']}")
        assert res.status_code == 200
        assert res.json()["handle"] == "jdoe"


class TestExperienceAndEducation:
    """POST/DELETE /api/profile/experience and /api/profile/education"""

    async def test_add_experience_goes_first(self, async_client, test_user):
        await _create_profile(async_client, test_user)
        await async_client.post("/api/profile/experience", json=EXPERIENCE, headers=test_user["headers"])
        res = await async_client.post(
            "/api/profile/experience",
            json={"title": "CTO", "company": "Startup", "from": "2023-06-01"},
            headers=test_user["headers"],
        )
        assert res.status_code == 200
        exp = res.json()["experience"]
        assert [e["title"] for e in exp] == ["CTO", "Backend Engineer"]
        assert exp[0]["_id"]
        assert exp[0]["from"] == "2023-06-01"
        assert exp[0]["current"] is False
        assert exp[1]["current"] is True

    async def test_add_experience_without_profile(self, async_client, test_user):
        res = await async_client.post("/api/profile/experience", json=EXPERIENCE, headers=test_user["headers"])
        assert res.status_code == 404
        assert res.json() == {"noprofile": "There is no profile for this user"}

    async def test_add_experience_validation(self, async_client, test_user):
        await _create_profile(async_client, test_user)
        res = await async_client.post(
            "/api/profile/experience", json={"title": "", "company": "Acme"}, headers=test_user["headers"]
        )
        assert res.status_code == 400
        assert res.json() == {"title": "Job title field is required", "from": "From date field is required"}

    async def test_add_experience_bad_date(self, async_client, test_user):
        await _create_profile(async_client, test_user)
        res = await async_client.post(
            "/api/profile/experience",
            json={**EXPERIENCE, "from": "last tuesday"},
            headers=test_user["headers"],
        )
        assert res.status_code == 400
        assert "from" in res.json()

    async def test_remove_experience(self, async_client, test_user):
        await _create_profile(async_client, test_user)
        for title in ("First", "Second", "Third"):
            res = await async_client.post(
                "/api/profile/experience",
                json={**EXPERIENCE, "title": title},
                headers=test_user["headers"],
            )
        exp = res.json()["experience"]
        assert [e["title"] for e in exp] == ["Third", "Second", "First"]

        res = await async_client.delete(f"/api/profile/experience/{exp[1]['_id']}", headers=test_user["headers"])
        assert res.status_code == 200
        assert [e["title"] for e in res.json()["experience"]] == ["Third", "First"]

    async def test_remove_unknown_experience_does_not_write(self, async_client, test_user, memory_store):
        await _create_profile(async_client, test_user)
        added = await async_client.post("/api/profile/experience", json=EXPERIENCE, headers=test_user["headers"])
        writes = memory_store.write_count

        res = await async_client.delete("/api/profile/experience/does-not-exist", headers=test_user["headers"])
        assert res.status_code == 200
        assert res.json()["experience"] == added.json()["experience"]
        assert memory_store.write_count == writes

    async def test_education(self, async_client, test_user):
        await _create_profile(async_client, test_user)
        res = await async_client.post("/api/profile/education", json=EDUCATION, headers=test_user["headers"])
        assert res.status_code == 200
        edu = res.json()["education"]
        assert len(edu) == 1
        assert edu[0]["fieldOfStudy"] == "Computer Science"

        res = await async_client.delete(f"/api/profile/education/{edu[0]['_id']}", headers=test_user["headers"])
        assert res.status_code == 200
        assert res.json()["education"] == []

    async def test_education_validation(self, async_client, test_user):
        await _create_profile(async_client, test_user)
        res = await async_client.post("/api/profile/education", json={"school": "MIT"}, headers=test_user["headers"])
        assert res.status_code == 400
        assert set(res.json()) == {"degree", "fieldOfStudy", "from"}


class TestDeleteAccount:
    """DELETE /api/profile"""

    async def test_delete_account(self, async_client, test_user, memory_store):
        await _create_profile(async_client, test_user)
        res = await async_client.delete("/api/profile", headers=test_user["headers"])
        assert res.status_code == 200
        assert res.json() == {"success": True}
        assert await memory_store.find(PROFILES) == []
        assert await memory_store.get(USERS, test_user["id"]) is None

        res = await async_client.get("/api/users/current", headers=test_user["headers"])
        assert res.status_code == 401

    async def test_delete_account_without_profile(self, async_client, test_user, memory_store):
        res = await async_client.delete("/api/profile", headers=test_user["headers"])
        assert res.status_code == 200
        assert await memory_store.get(USERS, test_user["id"]) is None
