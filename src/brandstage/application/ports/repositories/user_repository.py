"""User profile repository port."""

from typing import Protocol

from brandstage.domain.entities import UserProfile


class UserRepository(Protocol):
    """Port for user profile persistence."""

    async def get_by_id(self, user_id: str) -> UserProfile | None: ...

    async def get_many(self, user_ids: list[str]) -> list[UserProfile]: ...

    async def upsert(self, profile: UserProfile) -> None:
        """Create the profile or refresh its email and display name; claims_version is kept."""
        ...

    async def increment_claims_version(self, user_id: str) -> bool:
        """Return False when no profile exists for user_id."""
        ...
