"""Integration tests for registration and auth API."""

import pytest
from httpx import AsyncClient


class TestRegister:
    """POST /api/users."""

    @pytest.mark.asyncio
    async def test_register_returns_token(self, client: AsyncClient):
        response = await client.post(
            "/api/users",
            json={"name": "A", "email": "a@x.com", "password": "secret1"},
        )

        assert response.status_code == 200
        assert set(response.json()) == {"token"}

    @pytest.mark.asyncio
    async def test_register_same_email_twice(self, client: AsyncClient):
        body = {"name": "A", "email": "a@x.com", "password": "secret1"}
        await client.post("/api/users", json=body)

        response = await client.post("/api/users", json={**body, "email": "A@X.com"})

        assert response.status_code == 400
        assert response.json()["error_code"] == "USER_ALREADY_EXISTS"
        assert response.json()["message"] == "User already exists"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"name": "", "email": "a@x.com", "password": "secret1"},
            {"name": "A", "email": "not-an-email", "password": "secret1"},
            {"name": "A", "email": "a@x.com", "password": "short"},
            {"email": "a@x.com", "password": "secret1"},
        ],
    )
    async def test_register_validation(self, client: AsyncClient, body: dict):
        response = await client.post("/api/users", json=body)

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestAuth:
    """GET and POST /api/auth."""

    @pytest.mark.asyncio
    async def test_get_authenticated_user(self, client: AsyncClient):
        register = await client.post(
            "/api/users",
            json={"name": "A", "email": "a@x.com", "password": "secret1"},
        )
        token = register.json()["token"]

        response = await client.get("/api/auth", headers={"x-auth-token": token})

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "A"
        assert data["email"] == "a@x.com"
        assert data["avatar"].startswith("//www.gravatar.com/avatar/")
        assert "password" not in data
        assert "password_hash" not in data

    @pytest.mark.asyncio
    async def test_bearer_header_is_accepted(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ):
        token = auth_headers["x-auth-token"]

        response = await client.get("/api/auth", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_no_token(self, client: AsyncClient):
        response = await client.get("/api/auth")

        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"
        assert response.json()["message"] == "No token, authorization denied"

    @pytest.mark.asyncio
    async def test_invalid_token(self, client: AsyncClient):
        response = await client.get("/api/auth", headers={"x-auth-token": "garbage"})

        assert response.status_code == 401
        assert response.json()["error_code"] == "INVALID_TOKEN"

    @pytest.mark.asyncio
    async def test_login(self, client: AsyncClient, auth_headers: dict[str, str]):
        response = await client.post(
            "/api/auth",
            json={"email": "test@example.com", "password": "secret1"},
        )

        assert response.status_code == 200
        token = response.json()["token"]
        me = await client.get("/api/auth", headers={"x-auth-token": token})
        assert me.json()["email"] == "test@example.com"

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ):
        wrong_password = await client.post(
            "/api/auth",
            json={"email": "test@example.com", "password": "wrong-one"},
        )
        unknown_email = await client.post(
            "/api/auth",
            json={"email": "nobody@example.com", "password": "secret1"},
        )

        assert wrong_password.status_code == unknown_email.status_code == 400
        assert wrong_password.json() == unknown_email.json()
        assert wrong_password.json()["error_code"] == "INVALID_CREDENTIALS"

    @pytest.mark.asyncio
    async def test_deleted_user_is_not_found(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ):
        await client.delete("/api/profiles", headers=auth_headers)

        response = await client.get("/api/auth", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error_code"] == "USER_NOT_FOUND"
