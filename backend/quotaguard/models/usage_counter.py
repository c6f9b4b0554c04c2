"""Usage counter model: one row per (account, billing period)."""

from datetime import date

from sqlalchemy import Date, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from quotaguard.models._base import TimestampedBase


class UsageCounter(TimestampedBase):
    """Per-period operation counters.

    Created lazily on the first operation of a period, mutated only through
    atomic increments and never deleted.
    """

    __tablename__ = "usage_tracking"

    account_id: Mapped[str] = mapped_column(String(255), nullable=False)
    month: Mapped[date] = mapped_column(
        Date, nullable=False, comment="First day of the billing month"
    )
    thumbnails_generated: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    magic_edits_used: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    upscales_used: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    background_removals_used: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("account_id", "month", name="uq_usage_tracking_account_month"),
    )
