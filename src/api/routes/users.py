"""User registration routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.services import get_user_service
from api.schemas.user import RegisterRequest, TokenResponse
from core.rate_limit import AUTH_LIMIT, limiter
from domain.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=TokenResponse,
    summary="Register a user",
    responses={
        200: {"description": "User registered, token issued"},
        400: {"description": "Validation failed or user already exists"},
    },
)
@limiter.limit(AUTH_LIMIT)  # type: ignore[untyped-decorator]
async def register_user(
    request: Request,
    body: RegisterRequest,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    """Register a user. The avatar is derived from the email's Gravatar."""
    token = await service.register(
        name=body.name,
        email=body.email,
        password=body.password,
    )
    return TokenResponse(token=token)
