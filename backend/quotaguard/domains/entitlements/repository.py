"""Entitlements repository wrapping crud.subscription."""

from typing import Optional, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from quotaguard import crud
from quotaguard.models.subscription import Subscription


class SubscriptionRepositoryProtocol(Protocol):
    """Read access to subscription catalog rows."""

    async def get_latest_usable(
        self, db: AsyncSession, *, account_id: str
    ) -> Optional[Subscription]:
        """Newest active-or-trial subscription for the account, tier loaded."""
        ...


class SubscriptionRepository(SubscriptionRepositoryProtocol):
    """Delegates to the crud.subscription singleton."""

    async def get_latest_usable(
        self, db: AsyncSession, *, account_id: str
    ) -> Optional[Subscription]:
        """Newest active-or-trial subscription for the account."""
        return await crud.subscription.get_latest_usable(db, account_id=account_id)
