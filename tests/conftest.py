"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any

# Test settings must be in place before the app modules read them
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["DATABASE_CREATE_TABLES"] = "false"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.password import BcryptPasswordHasher
from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.github.client import GitHubClient


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
GITHUB_TEST_URL = "https://github.test"

DEFAULT_USER = {"name": "Test User", "email": "test@example.com", "password": "secret1"}


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """UoW factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def password_hasher() -> BcryptPasswordHasher:
    """Cheapest bcrypt cost, to keep the suite fast."""
    return BcryptPasswordHasher(rounds=4)


class GitHubStub:
    """Programmable stand-in for the GitHub API behind httpx.MockTransport."""

    def __init__(self) -> None:
        self.status_code = 200
        self.payload: Any = [{"id": 1, "name": "hello-world"}]
        self.raise_error: Exception | None = None
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_error:
            raise self.raise_error
        return httpx.Response(self.status_code, json=self.payload)


@pytest.fixture
def github_stub() -> GitHubStub:
    return GitHubStub()


@pytest.fixture
def github_client(github_stub: GitHubStub) -> GitHubClient:
    return GitHubClient(
        base_url=GITHUB_TEST_URL,
        client_id="",
        client_secret="",
        token="",
        timeout=5.0,
        transport=httpx.MockTransport(github_stub.handler),
    )


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    auth_provider: JWTAuthProvider,
    password_hasher: BcryptPasswordHasher,
    github_client: GitHubClient,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create test client with database, auth and upstream overrides.

    This client:
    - Uses a fresh in-memory SQLite database
    - Signs and validates tokens with the test auth provider
    - Routes GitHub calls to the in-process stub
    """
    from api.dependencies.auth import get_auth_provider
    from api.dependencies.services import (
        get_github_client,
        get_post_service,
        get_profile_service,
        get_user_service,
    )
    from domain.services.post_service import PostService
    from domain.services.profile_service import ProfileService
    from domain.services.user_service import UserService
    from infrastructure.database.session import get_async_session
    from main import create_app

    app = create_app()

    async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_user_service] = lambda: UserService(
        uow_factory,
        auth_provider=auth_provider,
        password_hasher=password_hasher,
    )
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(uow_factory)
    app.dependency_overrides[get_post_service] = lambda: PostService(uow_factory)
    app.dependency_overrides[get_github_client] = lambda: github_client
    app.dependency_overrides[get_async_session] = override_get_async_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def register(client: AsyncClient) -> Callable[..., Awaitable[dict[str, str]]]:
    """Register a user through the API and return their auth headers."""

    async def _register(
        name: str = DEFAULT_USER["name"],
        email: str = DEFAULT_USER["email"],
        password: str = DEFAULT_USER["password"],
    ) -> dict[str, str]:
        response = await client.post(
            "/api/users",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 200, response.text
        return {"x-auth-token": response.json()["token"]}

    return _register


@pytest.fixture
async def auth_headers(register: Callable[..., Awaitable[dict[str, str]]]) -> dict[str, str]:
    """Headers for the default registered user."""
    return await register()


@pytest.fixture
async def other_headers(register: Callable[..., Awaitable[dict[str, str]]]) -> dict[str, str]:
    """Headers for a second, distinct user."""
    return await register(name="Other User", email="other@example.com", password="secret2")
