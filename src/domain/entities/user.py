"""User domain entity."""

import hashlib
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

GRAVATAR_BASE_URL = "//www.gravatar.com/avatar"


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookups."""
    return email.strip().lower()


def gravatar_url(email: str, size: int = 200, rating: str = "pg", default: str = "mm") -> str:
    """Build the Gravatar URL for an email address.

    The hash is deterministic, so the same email always maps to the same avatar.
    """
    digest = hashlib.md5(normalize_email(email).encode("utf-8")).hexdigest()
    return f"{GRAVATAR_BASE_URL}/{digest}?s={size}&r={rating}&d={default}"


@dataclass
class User:
    """Domain entity for a registered user."""

    name: str
    email: str
    password_hash: str
    id: UUID = field(default_factory=uuid4)
    avatar: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        self.email = normalize_email(self.email)


@dataclass(frozen=True, slots=True)
class UserSummary:
    """Read-only public view of a user, embedded in profiles."""

    id: UUID
    name: str
    avatar: str | None = None
