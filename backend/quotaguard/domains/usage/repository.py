"""Usage domain repository wrapping crud.usage_counter."""

from datetime import date
from typing import Optional, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from quotaguard import crud
from quotaguard.domains.usage.types import (
    COUNTER_FIELDS,
    OperationKind,
    PeriodUsage,
    UsageCounts,
)


class UsageCounterRepositoryProtocol(Protocol):
    """Data access for per-period usage counters."""

    async def get_counts(
        self, db: AsyncSession, *, account_id: str, period: date
    ) -> Optional[UsageCounts]:
        """Get counters for (account, period); None when no row exists."""
        ...

    async def get_history(
        self, db: AsyncSession, *, account_id: str, limit: int
    ) -> list[PeriodUsage]:
        """Get counters for the most recent periods, newest first."""
        ...

    async def admit_and_increment(
        self,
        db: AsyncSession,
        *,
        account_id: str,
        period: date,
        operation: OperationKind,
        limit: Optional[int],
    ) -> tuple[bool, UsageCounts]:
        """Atomically increment *operation* unless its counter already reached *limit*."""
        ...


class UsageCounterRepository(UsageCounterRepositoryProtocol):
    """Delegates to the crud.usage_counter singleton."""

    async def get_counts(
        self, db: AsyncSession, *, account_id: str, period: date
    ) -> Optional[UsageCounts]:
        """Get counters for (account, period)."""
        record = await crud.usage_counter.get_for_period(db, account_id=account_id, month=period)
        return UsageCounts.from_record(record) if record else None

    async def get_history(
        self, db: AsyncSession, *, account_id: str, limit: int
    ) -> list[PeriodUsage]:
        """Get counters for the most recent periods."""
        records = await crud.usage_counter.get_history(db, account_id=account_id, limit=limit)
        return [PeriodUsage(period=r.month, counts=UsageCounts.from_record(r)) for r in records]

    async def admit_and_increment(
        self,
        db: AsyncSession,
        *,
        account_id: str,
        period: date,
        operation: OperationKind,
        limit: Optional[int],
    ) -> tuple[bool, UsageCounts]:
        """Conditional increment in a single transaction."""
        return await crud.usage_counter.admit_and_increment(
            db,
            account_id=account_id,
            month=period,
            field=COUNTER_FIELDS[operation],
            limit=limit,
        )
