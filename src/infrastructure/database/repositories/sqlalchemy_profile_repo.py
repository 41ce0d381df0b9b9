"""SQLAlchemy implementation of Profile repository."""

from dataclasses import asdict
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Education, Experience, Profile, SocialLinks
from domain.entities.user import UserSummary
from infrastructure.database.models import ProfileModel, UserModel


def _parse_date(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def _experience_to_json(entry: Experience) -> dict[str, Any]:
    return {
        "id": str(entry.id),
        "title": entry.title,
        "company": entry.company,
        "location": entry.location,
        "from": entry.from_date.isoformat(),
        "to": entry.to_date.isoformat() if entry.to_date else None,
        "current": entry.current,
        "description": entry.description,
    }


def _experience_from_json(data: dict[str, Any]) -> Experience:
    return Experience(
        id=UUID(data["id"]),
        title=data["title"],
        company=data["company"],
        location=data.get("location"),
        from_date=date.fromisoformat(data["from"]),
        to_date=_parse_date(data.get("to")),
        current=bool(data.get("current", False)),
        description=data.get("description"),
    )


def _education_to_json(entry: Education) -> dict[str, Any]:
    return {
        "id": str(entry.id),
        "school": entry.school,
        "degree": entry.degree,
        "field_of_study": entry.field_of_study,
        "from": entry.from_date.isoformat(),
        "to": entry.to_date.isoformat() if entry.to_date else None,
        "current": entry.current,
        "description": entry.description,
    }


def _education_from_json(data: dict[str, Any]) -> Education:
    return Education(
        id=UUID(data["id"]),
        school=data["school"],
        degree=data["degree"],
        field_of_study=data["field_of_study"],
        from_date=date.fromisoformat(data["from"]),
        to_date=_parse_date(data.get("to")),
        current=bool(data.get("current", False)),
        description=data.get("description"),
    )


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _select_with_owner(self) -> Select[tuple[ProfileModel, UserModel]]:
        """Profiles joined with the public fields of their user."""
        return select(ProfileModel, UserModel).outerjoin(
            UserModel, UserModel.id == ProfileModel.user_id
        )

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile belonging to a user."""
        stmt = self._select_with_owner().where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        row = result.first()
        return self._to_entity(row[0], row[1]) if row else None

    async def get_all(self) -> list[Profile]:
        """Get every profile, oldest first."""
        stmt = self._select_with_owner().order_by(ProfileModel.created_at)
        result = await self._session.execute(stmt)
        return [self._to_entity(profile, user) for profile, user in result.all()]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._session.flush()
        created = await self.get_by_user(profile.user_id)
        if created is None:
            raise ValueError(f"Profile for user {profile.user_id} not found after insert")
        return created

    async def update(self, profile: Profile) -> Profile:
        """Rewrite the stored profile document."""
        stmt = select(ProfileModel).where(ProfileModel.id == profile.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        model.company = profile.company
        model.website = profile.website
        model.location = profile.location
        model.status = profile.status
        model.bio = profile.bio
        model.github_username = profile.github_username
        model.skills = list(profile.skills)
        model.social = asdict(profile.social)
        model.experience = [_experience_to_json(e) for e in profile.experience]
        model.education = [_education_to_json(e) for e in profile.education]
        model.updated_at = profile.updated_at

        await self._session.flush()
        updated = await self.get_by_user(profile.user_id)
        if updated is None:
            raise ValueError(f"Profile {profile.id} not found")
        return updated

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete a user's profile."""
        stmt = delete(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    def _to_entity(self, model: ProfileModel, user: UserModel | None) -> Profile:
        """Convert ORM model (plus joined user) to domain entity."""
        social = {k: v for k, v in (model.social or {}).items() if k in SocialLinks.names()}
        return Profile(
            id=model.id,
            user_id=model.user_id,
            status=model.status,
            skills=list(model.skills or []),
            company=model.company,
            website=model.website,
            location=model.location,
            bio=model.bio,
            github_username=model.github_username,
            social=SocialLinks(**social),
            experience=[_experience_from_json(e) for e in model.experience or []],
            education=[_education_from_json(e) for e in model.education or []],
            owner=UserSummary(id=user.id, name=user.name, avatar=user.avatar) if user else None,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            user_id=entity.user_id,
            company=entity.company,
            website=entity.website,
            location=entity.location,
            status=entity.status,
            bio=entity.bio,
            github_username=entity.github_username,
            skills=list(entity.skills),
            social=asdict(entity.social),
            experience=[_experience_to_json(e) for e in entity.experience],
            education=[_education_to_json(e) for e in entity.education],
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
