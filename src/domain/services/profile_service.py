"""Profile service layer with business logic."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    EducationNotFoundError,
    ExperienceNotFoundError,
    ProfileNotFoundError,
)
from domain.entities.profile import Education, Experience, Profile, ProfilePatch
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.identity import require_token_user

logger = structlog.get_logger()


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_for_user(self, user_id: UUID) -> Profile:
        """Get a user's profile or raise ProfileNotFoundError."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))
            return profile

    async def get_all(self) -> list[Profile]:
        """Get every profile."""
        async with self._uow_factory() as uow:
            return await uow.profiles.get_all()  # type: ignore[no-any-return]

    async def upsert(self, user_id: UUID, patch: ProfilePatch) -> Profile:
        """Create the profile from the patch, or merge the patch into it."""
        async with self._uow_factory() as uow:
            await require_token_user(uow, user_id)
            profile = await uow.profiles.get_by_user(user_id)

            if profile:
                profile.apply(patch)
                saved = await uow.profiles.update(profile)
            else:
                saved = await uow.profiles.create(Profile.from_patch(user_id, patch))
                logger.info("profile_created", user_id=str(user_id))

            await uow.commit()
            return saved

    async def delete_account(self, user_id: UUID) -> None:
        """Delete the profile and then the user.

        The user's posts are intentionally left in place.
        """
        async with self._uow_factory() as uow:
            await uow.profiles.delete_by_user(user_id)
            await uow.users.delete(user_id)
            await uow.commit()

        logger.info("account_deleted", user_id=str(user_id))

    async def add_experience(self, user_id: UUID, experience: Experience) -> Profile:
        """Prepend an experience entry."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            profile.add_experience(experience)
            updated = await uow.profiles.update(profile)
            await uow.commit()
            return updated

    async def remove_experience(self, user_id: UUID, experience_id: UUID) -> Profile:
        """Remove an experience entry by id."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            if not profile.remove_experience(experience_id):
                raise ExperienceNotFoundError(str(experience_id))
            updated = await uow.profiles.update(profile)
            await uow.commit()
            return updated

    async def add_education(self, user_id: UUID, education: Education) -> Profile:
        """Prepend an education entry."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            profile.add_education(education)
            updated = await uow.profiles.update(profile)
            await uow.commit()
            return updated

    async def remove_education(self, user_id: UUID, education_id: UUID) -> Profile:
        """Remove an education entry by id."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            if not profile.remove_education(education_id):
                raise EducationNotFoundError(str(education_id))
            updated = await uow.profiles.update(profile)
            await uow.commit()
            return updated

    async def _require_profile(self, uow: IUnitOfWork, user_id: UUID) -> Profile:
        profile = await uow.profiles.get_by_user(user_id)
        if not profile:
            raise ProfileNotFoundError(str(user_id))
        return profile
