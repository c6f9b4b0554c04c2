"""Fake profile repository for testing."""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from quotaguard.models.user_profile import UserProfile


class FakeUserProfileRepository:
    """In-memory fake for UserProfileRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize empty in-memory store."""
        self._profiles: dict[str, UserProfile] = {}

    def seed(self, profile: UserProfile) -> None:
        """Store a profile keyed by its id."""
        self._profiles[profile.id] = profile

    async def get(self, db: AsyncSession, *, account_id: str) -> Optional[UserProfile]:
        """Profile for the account, if seeded."""
        return self._profiles.get(account_id)
