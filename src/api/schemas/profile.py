"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from domain.entities.profile import (
    PROFILE_FIELDS,
    Education,
    Experience,
    Profile,
    ProfilePatch,
    SocialLinks,
)


class ProfileUpsert(BaseModel):
    """Schema for creating or updating the caller's profile.

    Only fields present in the request with a non-empty value end up in the
    patch, so a partial body never clears what is already stored.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    status: str = Field(..., min_length=1)
    skills: list[str] = Field(
        ...,
        description="Comma-separated string or list of skills",
    )
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = Field(
        None,
        validation_alias=AliasChoices("githubusername", "github_username"),
    )
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, list):
            v = [s.strip() if isinstance(s, str) else s for s in v]
            v = [s for s in v if s != ""]
        return v

    @field_validator("skills")
    @classmethod
    def require_skills(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("Skills is required")
        return v

    def to_patch(self) -> ProfilePatch:
        """Build a patch from the fields the client actually sent."""
        sent = {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) not in (None, "")
        }
        return ProfilePatch(
            values={k: v for k, v in sent.items() if k in PROFILE_FIELDS},
            social={k: v for k, v in sent.items() if k in SocialLinks.names()},
        )


class _DatedEntryCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = None

    @model_validator(mode="after")
    def check_date_order(self) -> "_DatedEntryCreate":
        if self.to_date and self.to_date < self.from_date:
            raise ValueError("'to' date must not be before 'from' date")
        return self


class ExperienceCreate(_DatedEntryCreate):
    """Schema for adding an experience entry."""

    title: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    location: str | None = None

    def to_entity(self) -> Experience:
        return Experience(
            title=self.title,
            company=self.company,
            location=self.location,
            from_date=self.from_date,
            to_date=self.to_date,
            current=self.current,
            description=self.description,
        )


class EducationCreate(_DatedEntryCreate):
    """Schema for adding an education entry."""

    school: str = Field(..., min_length=1)
    degree: str = Field(..., min_length=1)
    field_of_study: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("fieldofstudy", "field_of_study"),
    )

    def to_entity(self) -> Education:
        return Education(
            school=self.school,
            degree=self.degree,
            field_of_study=self.field_of_study,
            from_date=self.from_date,
            to_date=self.to_date,
            current=self.current,
            description=self.description,
        )


class ExperienceResponse(BaseModel):
    """Schema for an experience entry."""

    id: UUID
    title: str
    company: str
    location: str | None
    from_date: date = Field(serialization_alias="from")
    to_date: date | None = Field(serialization_alias="to")
    current: bool
    description: str | None

    @classmethod
    def from_entity(cls, entry: Experience) -> "ExperienceResponse":
        return cls(
            id=entry.id,
            title=entry.title,
            company=entry.company,
            location=entry.location,
            from_date=entry.from_date,
            to_date=entry.to_date,
            current=entry.current,
            description=entry.description,
        )


class EducationResponse(BaseModel):
    """Schema for an education entry."""

    id: UUID
    school: str
    degree: str
    field_of_study: str
    from_date: date = Field(serialization_alias="from")
    to_date: date | None = Field(serialization_alias="to")
    current: bool
    description: str | None

    @classmethod
    def from_entity(cls, entry: Education) -> "EducationResponse":
        return cls(
            id=entry.id,
            school=entry.school,
            degree=entry.degree,
            field_of_study=entry.field_of_study,
            from_date=entry.from_date,
            to_date=entry.to_date,
            current=entry.current,
            description=entry.description,
        )


class SocialLinksResponse(BaseModel):
    """Schema for social links."""

    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class OwnerResponse(BaseModel):
    """Public summary of the profile's user."""

    id: UUID
    name: str
    avatar: str | None = None


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "456e4567-e89b-12d3-a456-426614174000",
                "user_id": "123e4567-e89b-12d3-a456-426614174000",
                "owner": {
                    "id": "123e4567-e89b-12d3-a456-426614174000",
                    "name": "Ada Lovelace",
                    "avatar": "//www.gravatar.com/avatar/0c1b...?s=200&r=pg&d=mm",
                },
                "status": "Developer",
                "skills": ["python", "sql"],
                "company": "Analytical Engines",
                "github_username": "ada",
                "social": {"twitter": "https://twitter.com/ada"},
                "experience": [],
                "education": [],
                "created_at": "2026-01-28T10:00:00",
                "updated_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    user_id: UUID
    owner: OwnerResponse | None = None
    status: str
    skills: list[str]
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = None
    social: SocialLinksResponse
    experience: list[ExperienceResponse] = []
    education: list[EducationResponse] = []
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, profile: Profile) -> "ProfileResponse":
        owner = None
        if profile.owner:
            owner = OwnerResponse(
                id=profile.owner.id,
                name=profile.owner.name,
                avatar=profile.owner.avatar,
            )
        social = profile.social
        return cls(
            id=profile.id,
            user_id=profile.user_id,
            owner=owner,
            status=profile.status,
            skills=profile.skills,
            company=profile.company,
            website=profile.website,
            location=profile.location,
            bio=profile.bio,
            github_username=profile.github_username,
            social=SocialLinksResponse(
                youtube=social.youtube,
                twitter=social.twitter,
                facebook=social.facebook,
                linkedin=social.linkedin,
                instagram=social.instagram,
            ),
            experience=[ExperienceResponse.from_entity(e) for e in profile.experience],
            education=[EducationResponse.from_entity(e) for e in profile.education],
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )
