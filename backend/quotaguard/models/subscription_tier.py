"""Subscription tier model (catalog data owned by the billing integration)."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from quotaguard.models._base import TimestampedBase


class SubscriptionTier(TimestampedBase):
    """A purchasable tier and its monthly allowance."""

    __tablename__ = "subscription_tiers"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    thumbnails_per_month: Mapped[int] = mapped_column(
        Integer, nullable=False, comment="Monthly allowance of capped operations"
    )
    price_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
