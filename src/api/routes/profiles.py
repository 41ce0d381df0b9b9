"""Profile API routes."""

from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_github_client, get_profile_service
from api.schemas.common import MessageResponse
from api.schemas.profile import (
    EducationCreate,
    ExperienceCreate,
    ProfileResponse,
    ProfileUpsert,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.profile_service import ProfileService
from infrastructure.github.client import GitHubClient

router = APIRouter(prefix="/profiles", tags=["profiles"])

GITHUB_LOGIN_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9-]{0,38}$"


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get my profile",
    responses={404: {"description": "No profile for this user"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get the caller's profile with the owner's name and avatar."""
    profile = await service.get_for_user(user.id)
    return ProfileResponse.from_entity(profile)


@router.post(
    "",
    response_model=ProfileResponse,
    summary="Create or update my profile",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """
    Create the caller's profile, or merge the sent fields into it.

    Fields left out of the body keep their stored values.
    """
    profile = await service.upsert(user.id, body.to_patch())
    return ProfileResponse.from_entity(profile)


@router.get(
    "",
    response_model=list[ProfileResponse],
    summary="List all profiles",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> list[ProfileResponse]:
    """Public developer directory."""
    profiles = await service.get_all()
    return [ProfileResponse.from_entity(p) for p in profiles]


@router.get(
    "/user/{user_id}",
    response_model=ProfileResponse,
    summary="Get a user's profile",
    responses={404: {"description": "No profile for this user"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile_by_user(
    request: Request,
    user_id: UUID,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    profile = await service.get_for_user(user_id)
    return ProfileResponse.from_entity(profile)


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete my account",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_account(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """Delete the caller's profile and user. Posts are kept."""
    await service.delete_account(user.id)
    return MessageResponse(message="User deleted")


@router.put(
    "/experience",
    response_model=ProfileResponse,
    summary="Add experience",
    responses={404: {"description": "No profile for this user"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    body: ExperienceCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Add an experience entry at the top of the list."""
    profile = await service.add_experience(user.id, body.to_entity())
    return ProfileResponse.from_entity(profile)


@router.delete(
    "/experience/{exp_id}",
    response_model=ProfileResponse,
    summary="Remove experience",
    responses={404: {"description": "Profile or experience entry not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_experience(
    request: Request,
    exp_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    profile = await service.remove_experience(user.id, exp_id)
    return ProfileResponse.from_entity(profile)


@router.put(
    "/education",
    response_model=ProfileResponse,
    summary="Add education",
    responses={404: {"description": "No profile for this user"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_education(
    request: Request,
    body: EducationCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Add an education entry at the top of the list."""
    profile = await service.add_education(user.id, body.to_entity())
    return ProfileResponse.from_entity(profile)


@router.delete(
    "/education/{edu_id}",
    response_model=ProfileResponse,
    summary="Remove education",
    responses={404: {"description": "Profile or education entry not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_education(
    request: Request,
    edu_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    profile = await service.remove_education(user.id, edu_id)
    return ProfileResponse.from_entity(profile)


@router.get(
    "/github/{username}",
    summary="List a GitHub user's repositories",
    responses={502: {"description": "GitHub request failed"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_github_repos(
    request: Request,
    username: Annotated[str, Path(pattern=GITHUB_LOGIN_PATTERN)],
    client: GitHubClient = Depends(get_github_client),
) -> Any:
    """Proxy GitHub's repository listing. The upstream body is passed through."""
    return await client.get_user_repos(username)
