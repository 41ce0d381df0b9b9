"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer

from core.config import settings
from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser

# Security schemes for OpenAPI docs. The custom header wins over Bearer.
security = HTTPBearer(auto_error=False)
token_header = APIKeyHeader(name=settings.auth_header_name, auto_error=False)

# Singleton auth provider
_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> JWTAuthProvider:
    """Get or create the auth provider singleton."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


def _extract_token(
    credentials: HTTPAuthorizationCredentials | None,
    header_token: str | None,
) -> str | None:
    if header_token:
        return header_token
    if credentials:
        return credentials.credentials
    return None


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    header_token: Annotated[str | None, Depends(token_header)],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """
    Dependency to get the current authenticated user.

    Raises:
        AuthenticationError: If no token provided or token is invalid
    """
    token = _extract_token(credentials, header_token)
    if not token:
        raise AuthenticationError()

    user = await auth_provider.validate_token(token)

    if not user:
        raise AuthenticationError(
            message="Token is not valid",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    return user


async def get_optional_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    header_token: Annotated[str | None, Depends(token_header)],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> TokenUser | None:
    """
    Dependency to get the current user if authenticated.

    Returns:
        TokenUser if authenticated, None otherwise (no exception raised)
    """
    token = _extract_token(credentials, header_token)
    if not token:
        return None

    return await auth_provider.validate_token(token)


# Type alias for convenience in route handlers
CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
OptionalUser = Annotated[TokenUser | None, Depends(get_optional_user)]
