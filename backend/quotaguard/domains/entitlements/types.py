"""Entitlement types and pure functions."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

FREE_TRIAL_TIER_NAME = "Free Trial"
FREE_TRIAL_MONTHLY_ALLOWANCE = 5


class SubscriptionStatus(str, Enum):
    """Subscription status as written by the billing integration."""

    ACTIVE = "active"
    TRIAL = "trial"
    CANCELED = "canceled"
    NONE = "none"


# Statuses that grant a usable tier.
USABLE_STATUSES: frozenset[SubscriptionStatus] = frozenset(
    {SubscriptionStatus.ACTIVE, SubscriptionStatus.TRIAL}
)


@dataclass(frozen=True)
class Entitlement:
    """The resolved tier, status and limits for an account."""

    tier_name: str
    monthly_allowance: int
    status: SubscriptionStatus
    price_cents: int = 0
    current_period_end: Optional[datetime] = None
    cancel_at_period_end: bool = False

    @property
    def is_subscribed(self) -> bool:
        """Only a paid, active subscription counts as subscribed."""
        return self.status == SubscriptionStatus.ACTIVE

    @property
    def has_usable_tier(self) -> bool:
        """Whether the entitlement comes from an active or trial subscription."""
        return self.status in USABLE_STATUSES


def default_entitlement(allowance: int = FREE_TRIAL_MONTHLY_ALLOWANCE) -> Entitlement:
    """Entitlement for accounts without an active or trial subscription."""
    return Entitlement(
        tier_name=FREE_TRIAL_TIER_NAME,
        monthly_allowance=allowance,
        status=SubscriptionStatus.NONE,
    )


def entitlement_from_subscription(subscription: object) -> Entitlement:
    """Build an Entitlement from a subscription row with its tier loaded."""
    tier = subscription.tier
    return Entitlement(
        tier_name=tier.name,
        monthly_allowance=int(tier.thumbnails_per_month),
        status=SubscriptionStatus(subscription.status),
        price_cents=int(getattr(tier, "price_cents", 0) or 0),
        current_period_end=subscription.current_period_end,
        cancel_at_period_end=bool(subscription.cancel_at_period_end),
    )
