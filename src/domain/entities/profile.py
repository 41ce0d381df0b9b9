"""Profile domain entities."""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from typing import Any
from uuid import UUID, uuid4

from domain.entities.user import UserSummary

# Scalar profile attributes that a patch may set
PROFILE_FIELDS = (
    "company",
    "website",
    "location",
    "status",
    "skills",
    "bio",
    "github_username",
)


@dataclass
class SocialLinks:
    """Links to the user's accounts on other networks."""

    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None

    @classmethod
    def names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))


@dataclass
class Experience:
    """A job held by the user."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    location: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class Education:
    """A school attended by the user."""

    school: str
    degree: str
    field_of_study: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass(frozen=True)
class ProfilePatch:
    """Sparse update: only the attributes the client actually sent.

    Keys absent from ``values`` or ``social`` are left untouched on update and
    stay unset on create.
    """

    values: Mapping[str, Any] = field(default_factory=dict)
    social: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        unknown = set(self.values) - set(PROFILE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown profile fields: {sorted(unknown)}")
        unknown_social = set(self.social) - set(SocialLinks.names())
        if unknown_social:
            raise ValueError(f"Unknown social links: {sorted(unknown_social)}")


@dataclass
class Profile:
    """Domain entity for a developer profile. At most one per user."""

    user_id: UUID
    status: str
    id: UUID = field(default_factory=uuid4)
    skills: list[str] = field(default_factory=list)
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = None
    social: SocialLinks = field(default_factory=SocialLinks)
    experience: list[Experience] = field(default_factory=list)
    education: list[Education] = field(default_factory=list)
    owner: UserSummary | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    @classmethod
    def from_patch(cls, user_id: UUID, patch: ProfilePatch) -> "Profile":
        """Create a profile holding only the patched attributes."""
        profile = cls(user_id=user_id, status=patch.values.get("status", ""))
        profile.apply(patch)
        return profile

    def apply(self, patch: ProfilePatch) -> None:
        """Merge a sparse patch into this profile."""
        for name, value in patch.values.items():
            setattr(self, name, list(value) if name == "skills" else value)
        for name, value in patch.social.items():
            setattr(self.social, name, value)
        self.updated_at = datetime.utcnow()

    def add_experience(self, experience: Experience) -> None:
        """Insert as the most recent entry."""
        self.experience.insert(0, experience)
        self.updated_at = datetime.utcnow()

    def remove_experience(self, experience_id: UUID) -> bool:
        """Remove the entry with this id. Returns False if there is none."""
        remaining = [e for e in self.experience if e.id != experience_id]
        if len(remaining) == len(self.experience):
            return False
        self.experience = remaining
        self.updated_at = datetime.utcnow()
        return True

    def add_education(self, education: Education) -> None:
        """Insert as the most recent entry."""
        self.education.insert(0, education)
        self.updated_at = datetime.utcnow()

    def remove_education(self, education_id: UUID) -> bool:
        """Remove the entry with this id. Returns False if there is none."""
        remaining = [e for e in self.education if e.id != education_id]
        if len(remaining) == len(self.education):
            return False
        self.education = remaining
        self.updated_at = datetime.utcnow()
        return True
