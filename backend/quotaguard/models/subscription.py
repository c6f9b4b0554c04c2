"""Subscription model.

Rows are written by the billing integration; quotaguard only reads them.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quotaguard.models._base import TimestampedBase

if TYPE_CHECKING:
    from quotaguard.models.subscription_tier import SubscriptionTier


class Subscription(TimestampedBase):
    """An account's subscription to a tier."""

    __tablename__ = "user_subscriptions"

    account_id: Mapped[str] = mapped_column(String(255), nullable=False)
    tier_id: Mapped[UUID] = mapped_column(
        ForeignKey("subscription_tiers.id", ondelete="RESTRICT"), nullable=False
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    current_period_end: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    cancel_at_period_end: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    tier: Mapped["SubscriptionTier"] = relationship("SubscriptionTier", lazy="joined")

    __table_args__ = (
        Index("idx_user_subscriptions_account_status", "account_id", "status", "created_at"),
    )
