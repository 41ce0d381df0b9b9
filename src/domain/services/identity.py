"""Identity checks shared by services that act on behalf of a token user."""

from uuid import UUID

from core.exceptions import AuthenticationError, ErrorCode
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork


async def require_token_user(uow: IUnitOfWork, user_id: UUID) -> User:
    """Return the token's user, or reject a token that outlived its account."""
    user = await uow.users.get(user_id)
    if not user:
        raise AuthenticationError(
            message="Token user no longer exists",
            error_code=ErrorCode.INVALID_TOKEN,
        )
    return user
