"""Fake subscription repository for testing."""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from quotaguard.core.exceptions import StorageUnavailableError
from quotaguard.domains.entitlements.types import USABLE_STATUSES, SubscriptionStatus
from quotaguard.models.subscription import Subscription
from quotaguard.models.subscription_tier import SubscriptionTier


def make_subscription(
    account_id: str,
    *,
    tier_name: str = "Pro",
    allowance: int = 100,
    price_cents: int = 999,
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE,
    created_at: Optional[datetime] = None,
    current_period_end: Optional[datetime] = None,
    cancel_at_period_end: bool = False,
) -> Subscription:
    """Build a transient Subscription with its tier attached."""
    tier = SubscriptionTier(
        id=uuid4(), name=tier_name, thumbnails_per_month=allowance, price_cents=price_cents
    )
    return Subscription(
        id=uuid4(),
        account_id=account_id,
        tier_id=tier.id,
        tier=tier,
        status=status.value,
        current_period_end=current_period_end,
        cancel_at_period_end=cancel_at_period_end,
        created_at=created_at or datetime.now(timezone.utc),
    )


class FakeSubscriptionRepository:
    """In-memory fake for SubscriptionRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize empty in-memory store."""
        self._by_account: dict[str, list[Subscription]] = {}
        self._failures_remaining = 0
        self._calls: list[tuple] = []

    def seed(self, subscription: Subscription) -> None:
        """Add a subscription row."""
        self._by_account.setdefault(subscription.account_id, []).append(subscription)

    def fail_next(self, times: int = 1) -> None:
        """Make the next *times* calls raise StorageUnavailableError."""
        self._failures_remaining = times

    def call_count(self, method: str) -> int:
        """Return the number of times a method was called."""
        return sum(1 for name, *_ in self._calls if name == method)

    async def get_latest_usable(
        self, db: AsyncSession, *, account_id: str
    ) -> Optional[Subscription]:
        """Newest active-or-trial subscription."""
        self._calls.append(("get_latest_usable", account_id))
        if self._failures_remaining > 0:
            self._failures_remaining -= 1
            raise StorageUnavailableError("fake storage outage")
        usable = [
            s
            for s in self._by_account.get(account_id, [])
            if SubscriptionStatus(s.status) in USABLE_STATUSES
        ]
        if not usable:
            return None
        return max(usable, key=lambda s: s.created_at)
