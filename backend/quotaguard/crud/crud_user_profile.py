"""CRUD operations for the UserProfile model (read-only)."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from quotaguard.core.exceptions import wrap_storage_errors
from quotaguard.models.user_profile import UserProfile


class CRUDUserProfile:
    """Read operations for UserProfile."""

    def __init__(self, model: type[UserProfile]):
        """Initialize with the mapped model."""
        self.model = model

    @wrap_storage_errors
    async def get(self, db: AsyncSession, *, account_id: str) -> Optional[UserProfile]:
        """Get the profile for an account, if one exists."""
        result = await db.execute(select(self.model).where(self.model.id == account_id))
        return result.scalar_one_or_none()


user_profile = CRUDUserProfile(UserProfile)
