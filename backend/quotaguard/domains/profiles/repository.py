"""Profile repository wrapping crud.user_profile."""

from typing import Optional, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from quotaguard import crud
from quotaguard.models.user_profile import UserProfile


class UserProfileRepositoryProtocol(Protocol):
    """Read access to user profiles."""

    async def get(self, db: AsyncSession, *, account_id: str) -> Optional[UserProfile]:
        """Profile for the account, if any."""
        ...


class UserProfileRepository(UserProfileRepositoryProtocol):
    """Delegates to the crud.user_profile singleton."""

    async def get(self, db: AsyncSession, *, account_id: str) -> Optional[UserProfile]:
        """Profile for the account, if any."""
        return await crud.user_profile.get(db, account_id=account_id)
