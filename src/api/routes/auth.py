"""Authentication routes: login and current user."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_user_service
from api.schemas.user import LoginRequest, TokenResponse, UserResponse
from core.rate_limit import AUTH_LIMIT, READ_LIMIT, limiter
from domain.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get(
    "",
    response_model=UserResponse,
    summary="Get the authenticated user",
    responses={
        401: {"description": "Missing or invalid token"},
        404: {"description": "User no longer exists"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_authenticated_user(
    request: Request,
    user: CurrentUser,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Return the caller's user record without the password."""
    record = await service.get_by_id(user.id)
    return UserResponse.from_entity(record)


@router.post(
    "",
    response_model=TokenResponse,
    summary="Log in",
    responses={
        200: {"description": "Credentials accepted, token issued"},
        400: {"description": "Invalid credentials"},
    },
)
@limiter.limit(AUTH_LIMIT)  # type: ignore[untyped-decorator]
async def login(
    request: Request,
    body: LoginRequest,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    """Exchange email and password for a token."""
    token = await service.authenticate(email=body.email, password=body.password)
    return TokenResponse(token=token)
