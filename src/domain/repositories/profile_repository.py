"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities.

    Profiles returned by reads carry the ``owner`` summary of their user.
    """

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile belonging to a user."""
        ...

    async def get_all(self) -> list[Profile]:
        """Get every profile, oldest first."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Persist the whole profile document."""
        ...

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete a user's profile and return success status."""
        ...
