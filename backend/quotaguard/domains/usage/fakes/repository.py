"""Fake usage counter repository for testing."""

import asyncio
from datetime import date
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from quotaguard.core.exceptions import StorageCommitUncertainError, StorageUnavailableError
from quotaguard.domains.usage.types import (
    COUNTER_FIELDS,
    OperationKind,
    PeriodUsage,
    UsageCounts,
)


class FakeUsageCounterRepository:
    """In-memory fake for UsageCounterRepositoryProtocol.

    ``admit_and_increment`` holds a per-(account, period) ``asyncio.Lock``
    across its check and write, standing in for the row lock taken by the
    conditional UPDATE. The yield between read and write lets concurrent
    callers interleave.
    """

    def __init__(self) -> None:
        """Initialize empty in-memory stores."""
        self._rows: dict[tuple[str, date], UsageCounts] = {}
        self._locks: dict[tuple[str, date], asyncio.Lock] = {}
        self._failures_remaining = 0
        self._commit_failures_remaining = 0
        self._calls: list[tuple] = []

    # -- test helpers --------------------------------------------------------

    def seed(self, account_id: str, period: date, counts: UsageCounts) -> None:
        """Set the counters for (account, period)."""
        self._rows[(account_id, period)] = counts

    def counts_for(self, account_id: str, period: date) -> Optional[UsageCounts]:
        """Stored counters, None when no row exists."""
        return self._rows.get((account_id, period))

    def row_count(self) -> int:
        """Number of (account, period) rows."""
        return len(self._rows)

    def fail_next(self, times: int = 1) -> None:
        """Make the next *times* calls raise StorageUnavailableError."""
        self._failures_remaining = times

    def fail_commit_next(self, times: int = 1) -> None:
        """Make the next *times* increments apply and then report a lost commit."""
        self._commit_failures_remaining = times

    def call_count(self, method: str) -> int:
        """Return the number of times a method was called."""
        return sum(1 for name, *_ in self._calls if name == method)

    def _maybe_fail(self) -> None:
        if self._failures_remaining > 0:
            self._failures_remaining -= 1
            raise StorageUnavailableError("fake storage outage")

    # -- protocol ------------------------------------------------------------

    async def get_counts(
        self, db: AsyncSession, *, account_id: str, period: date
    ) -> Optional[UsageCounts]:
        """Get counters for (account, period)."""
        self._calls.append(("get_counts", account_id, period))
        self._maybe_fail()
        return self._rows.get((account_id, period))

    async def get_history(
        self, db: AsyncSession, *, account_id: str, limit: int
    ) -> list[PeriodUsage]:
        """Get counters newest period first."""
        self._calls.append(("get_history", account_id, limit))
        self._maybe_fail()
        periods = sorted(
            (period for (acct, period) in self._rows if acct == account_id), reverse=True
        )
        return [PeriodUsage(period=p, counts=self._rows[(account_id, p)]) for p in periods[:limit]]

    async def admit_and_increment(
        self,
        db: AsyncSession,
        *,
        account_id: str,
        period: date,
        operation: OperationKind,
        limit: Optional[int],
    ) -> tuple[bool, UsageCounts]:
        """Conditionally increment under a per-key lock."""
        self._calls.append(("admit_and_increment", account_id, period, operation, limit))
        self._maybe_fail()
        key = (account_id, period)
        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            current = self._rows.get(key, UsageCounts())
            await asyncio.sleep(0)
            if limit is not None and getattr(current, COUNTER_FIELDS[operation]) >= limit:
                return False, current
            updated = current.incremented(operation)
            self._rows[key] = updated
            if self._commit_failures_remaining > 0:
                self._commit_failures_remaining -= 1
                raise StorageCommitUncertainError("fake commit acknowledgement lost")
            return True, updated
