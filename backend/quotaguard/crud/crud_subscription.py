"""CRUD operations for the Subscription model (read-only)."""

from typing import Optional

from sqlalchemy import and_, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from quotaguard.core.exceptions import wrap_storage_errors
from quotaguard.domains.entitlements.types import USABLE_STATUSES
from quotaguard.models.subscription import Subscription


class CRUDSubscription:
    """Read operations for Subscription."""

    def __init__(self, model: type[Subscription]):
        """Initialize with the mapped model."""
        self.model = model

    @wrap_storage_errors
    async def get_latest_usable(
        self, db: AsyncSession, *, account_id: str
    ) -> Optional[Subscription]:
        """Get the most recently created active-or-trial subscription for an account.

        More than one such row violates the catalog's uniqueness expectation;
        the newest row wins.
        """
        query = (
            select(self.model)
            .where(
                and_(
                    self.model.account_id == account_id,
                    self.model.status.in_([s.value for s in USABLE_STATUSES]),
                )
            )
            .order_by(desc(self.model.created_at))
            .limit(1)
        )
        result = await db.execute(query)
        return result.unique().scalar_one_or_none()


subscription = CRUDSubscription(Subscription)
