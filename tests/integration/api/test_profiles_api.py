"""Integration tests for Profiles API."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from tests.conftest import GitHubStub

FULL_PROFILE = {
    "status": "Developer",
    "skills": "python, sql, ,docker",
    "company": "Acme",
    "website": "https://acme.dev",
    "location": "Berlin",
    "bio": "Builds things",
    "githubusername": "octocat",
    "twitter": "https://twitter.com/octo",
    "youtube": "https://youtube.com/octo",
}


async def _create_profile(client: AsyncClient, headers: dict[str, str], **overrides) -> dict:
    response = await client.post(
        "/api/profiles", json={**FULL_PROFILE, **overrides}, headers=headers
    )
    assert response.status_code == 200, response.text
    return response.json()


class TestUpsertProfile:
    """POST /api/profiles."""

    @pytest.mark.asyncio
    async def test_create_profile(self, client: AsyncClient, auth_headers: dict[str, str]):
        data = await _create_profile(client, auth_headers)

        assert data["status"] == "Developer"
        assert data["skills"] == ["python", "sql", "docker"]
        assert data["github_username"] == "octocat"
        assert data["social"]["twitter"] == "https://twitter.com/octo"
        assert data["social"]["facebook"] is None
        assert data["owner"]["name"] == "Test User"
        assert data["owner"]["avatar"].startswith("//www.gravatar.com/avatar/")

    @pytest.mark.asyncio
    async def test_skills_as_list(self, client: AsyncClient, auth_headers: dict[str, str]):
        data = await _create_profile(client, auth_headers, skills=[" go ", "", "rust"])

        assert data["skills"] == ["go", "rust"]

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ):
        await _create_profile(client, auth_headers)

        response = await client.post(
            "/api/profiles",
            json={"status": "Lead", "skills": "go", "facebook": "https://fb.com/octo"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "Lead"
        assert data["skills"] == ["go"]
        assert data["company"] == "Acme"
        assert data["location"] == "Berlin"
        assert data["bio"] == "Builds things"
        assert data["github_username"] == "octocat"
        assert data["social"]["twitter"] == "https://twitter.com/octo"
        assert data["social"]["facebook"] == "https://fb.com/octo"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"skills": "python"},
            {"status": "Dev"},
            {"status": "", "skills": "python"},
            {"status": "Dev", "skills": " , ,"},
        ],
    )
    async def test_validation(
        self, client: AsyncClient, auth_headers: dict[str, str], body: dict
    ):
        response = await client.post("/api/profiles", json=body, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_requires_auth(self, client: AsyncClient):
        response = await client.post("/api/profiles", json=FULL_PROFILE)

        assert response.status_code == 401


class TestReadProfiles:
    """GET /api/profiles, /me and /user/{id}."""

    @pytest.mark.asyncio
    async def test_me_without_profile(self, client: AsyncClient, auth_headers: dict[str, str]):
        response = await client.get("/api/profiles/me", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error_code"] == "PROFILE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_me(self, client: AsyncClient, auth_headers: dict[str, str]):
        created = await _create_profile(client, auth_headers)

        response = await client.get("/api/profiles/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    @pytest.mark.asyncio
    async def test_list_is_public(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        other_headers: dict[str, str],
    ):
        await _create_profile(client, auth_headers)
        await _create_profile(client, other_headers, company="Initech")

        response = await client.get("/api/profiles")

        assert response.status_code == 200
        assert [p["company"] for p in response.json()] == ["Acme", "Initech"]

    @pytest.mark.asyncio
    async def test_by_user_id(self, client: AsyncClient, auth_headers: dict[str, str]):
        created = await _create_profile(client, auth_headers)

        response = await client.get(f"/api/profiles/user/{created['user_id']}")

        assert response.status_code == 200
        assert response.json()["status"] == "Developer"

    @pytest.mark.asyncio
    async def test_by_unknown_user_id(self, client: AsyncClient):
        response = await client.get(f"/api/profiles/user/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["error_code"] == "PROFILE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_by_malformed_user_id(self, client: AsyncClient):
        response = await client.get("/api/profiles/user/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestDeleteAccount:
    """DELETE /api/profiles."""

    @pytest.mark.asyncio
    async def test_deletes_profile_and_user_but_keeps_posts(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        other_headers: dict[str, str],
    ):
        created = await _create_profile(client, auth_headers)
        post = await client.post("/api/posts", json={"text": "hello"}, headers=auth_headers)

        response = await client.delete("/api/profiles", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "User deleted"}
        gone = await client.get(f"/api/profiles/user/{created['user_id']}")
        assert gone.status_code == 404
        kept = await client.get(f"/api/posts/{post.json()['id']}", headers=other_headers)
        assert kept.status_code == 200

    @pytest.mark.asyncio
    async def test_stale_token_cannot_recreate_profile(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ):
        await _create_profile(client, auth_headers)
        await client.delete("/api/profiles", headers=auth_headers)

        response = await client.post(
            "/api/profiles", json={"status": "Dev", "skills": "py"}, headers=auth_headers
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "INVALID_TOKEN"
        listing = await client.get("/api/profiles")
        assert listing.json() == []


class TestExperience:
    """PUT and DELETE /api/profiles/experience."""

    @pytest.mark.asyncio
    async def test_add_and_remove(self, client: AsyncClient, auth_headers: dict[str, str]):
        await _create_profile(client, auth_headers)

        await client.put(
            "/api/profiles/experience",
            json={"title": "Intern", "company": "Acme", "from": "2018-01-01", "to": "2018-06-30"},
            headers=auth_headers,
        )
        response = await client.put(
            "/api/profiles/experience",
            json={"title": "Engineer", "company": "Initech", "from": "2019-01-01", "current": True},
            headers=auth_headers,
        )

        assert response.status_code == 200
        experience = response.json()["experience"]
        assert [e["title"] for e in experience] == ["Engineer", "Intern"]
        assert experience[1]["from"] == "2018-01-01"
        assert experience[1]["to"] == "2018-06-30"

        removed = await client.delete(
            f"/api/profiles/experience/{experience[1]['id']}", headers=auth_headers
        )

        assert removed.status_code == 200
        assert [e["title"] for e in removed.json()["experience"]] == ["Engineer"]

    @pytest.mark.asyncio
    async def test_remove_unknown_id(self, client: AsyncClient, auth_headers: dict[str, str]):
        await _create_profile(client, auth_headers)
        await client.put(
            "/api/profiles/experience",
            json={"title": "Engineer", "company": "Initech", "from": "2019-01-01"},
            headers=auth_headers,
        )

        response = await client.delete(
            f"/api/profiles/experience/{uuid4()}", headers=auth_headers
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "EXPERIENCE_NOT_FOUND"
        me = await client.get("/api/profiles/me", headers=auth_headers)
        assert len(me.json()["experience"]) == 1

    @pytest.mark.asyncio
    async def test_add_without_profile(self, client: AsyncClient, auth_headers: dict[str, str]):
        response = await client.put(
            "/api/profiles/experience",
            json={"title": "Engineer", "company": "Initech", "from": "2019-01-01"},
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "PROFILE_NOT_FOUND"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"company": "Initech", "from": "2019-01-01"},
            {"title": "Engineer", "from": "2019-01-01"},
            {"title": "Engineer", "company": "Initech"},
            {"title": "Engineer", "company": "Initech", "from": "2019-01-01", "to": "2018-01-01"},
        ],
    )
    async def test_validation(
        self, client: AsyncClient, auth_headers: dict[str, str], body: dict
    ):
        await _create_profile(client, auth_headers)

        response = await client.put("/api/profiles/experience", json=body, headers=auth_headers)

        assert response.status_code == 400


class TestEducation:
    """PUT and DELETE /api/profiles/education."""

    @pytest.mark.asyncio
    async def test_add_and_remove(self, client: AsyncClient, auth_headers: dict[str, str]):
        await _create_profile(client, auth_headers)

        response = await client.put(
            "/api/profiles/education",
            json={
                "school": "MIT",
                "degree": "BSc",
                "fieldofstudy": "Computer Science",
                "from": "2014-09-01",
                "to": "2018-06-01",
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        education = response.json()["education"]
        assert education[0]["field_of_study"] == "Computer Science"

        removed = await client.delete(
            f"/api/profiles/education/{education[0]['id']}", headers=auth_headers
        )

        assert removed.status_code == 200
        assert removed.json()["education"] == []

    @pytest.mark.asyncio
    async def test_remove_unknown_id(self, client: AsyncClient, auth_headers: dict[str, str]):
        await _create_profile(client, auth_headers)

        response = await client.delete(
            f"/api/profiles/education/{uuid4()}", headers=auth_headers
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "EDUCATION_NOT_FOUND"


class TestGitHubRepos:
    """GET /api/profiles/github/{username}."""

    @pytest.mark.asyncio
    async def test_forwards_upstream_body(self, client: AsyncClient, github_stub: GitHubStub):
        github_stub.payload = [{"id": 7, "name": "spoon-knife", "forks_count": 2}]

        response = await client.get("/api/profiles/github/octocat")

        assert response.status_code == 200
        assert response.json() == [{"id": 7, "name": "spoon-knife", "forks_count": 2}]
        assert github_stub.requests[0].url.path == "/users/octocat/repos"

    @pytest.mark.asyncio
    async def test_upstream_failure_is_502(self, client: AsyncClient, github_stub: GitHubStub):
        github_stub.status_code = 404
        github_stub.payload = {"message": "Not Found"}

        response = await client.get("/api/profiles/github/ghost")

        assert response.status_code == 502
        assert response.json()["error_code"] == "UPSTREAM_ERROR"
        assert response.json()["message"] == "GitHub request failed"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("username", ["octocat%3Fx=", "-octocat", "octo_cat", "a" * 40])
    async def test_rejects_non_login_usernames(
        self, client: AsyncClient, github_stub: GitHubStub, username: str
    ):
        response = await client.get(f"/api/profiles/github/{username}")

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        assert github_stub.requests == []
