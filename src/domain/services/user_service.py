"""User service layer: registration, login and identity lookups."""

from collections.abc import Callable
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from domain.entities.user import User, gravatar_url, normalize_email
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.provider import IAuthProvider, IPasswordHasher, TokenUser

logger = structlog.get_logger()


class UserService:
    """Service layer for user accounts and token issuance."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        auth_provider: IAuthProvider,
        password_hasher: IPasswordHasher,
    ) -> None:
        self._uow_factory = uow_factory
        self._auth = auth_provider
        self._hasher = password_hasher

    async def register(self, name: str, email: str, password: str) -> str:
        """Create an account and return a token for it.

        Raises:
            UserAlreadyExistsError: If the email is already registered
        """
        email = normalize_email(email)
        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(email):
                raise UserAlreadyExistsError()

            user = User(
                name=name,
                email=email,
                avatar=gravatar_url(email),
                password_hash=self._hasher.hash(password),
            )
            try:
                created = await uow.users.create(user)
                await uow.commit()
            except IntegrityError as exc:
                await uow.rollback()
                # A concurrent registration won the unique email index
                orig = str(exc.orig).lower() if exc.orig else ""
                if "unique" in orig or "duplicate" in orig:
                    raise UserAlreadyExistsError() from exc
                raise

        logger.info("user_registered", user_id=str(created.id))
        return self._issue_token(created)

    async def authenticate(self, email: str, password: str) -> str:
        """Verify credentials and return a token.

        Unknown email and wrong password raise the same error.
        """
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email)

        if not user or not self._hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()

        return self._issue_token(user)

    async def get_by_id(self, user_id: UUID) -> User:
        """Get a user by ID."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user

    def _issue_token(self, user: User) -> str:
        return self._auth.create_token(
            TokenUser(id=user.id, email=user.email, name=user.name)
        )
