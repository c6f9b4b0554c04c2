"""Usage domain protocols.

BillingCalendarProtocol: pure mapping from instants to period keys.
UsageLedgerProtocol: per-period counters with atomic admit-and-increment.
QuotaEnforcerProtocol: the admission decision for one metered operation.
UsageQueryServiceProtocol: read-only snapshot, history and audit views.
"""

from datetime import date, datetime
from typing import Optional, Protocol, runtime_checkable

from sqlalchemy.ext.asyncio import AsyncSession

from quotaguard.core.logging import ContextualLogger
from quotaguard.domains.usage.types import (
    Admission,
    ArtifactDetails,
    OperationKind,
    OperationResult,
    PeriodUsage,
    UsageCounts,
)
from quotaguard.schemas.usage import PeriodAudit, UsagePeriod, UsageSnapshot


@runtime_checkable
class BillingCalendarProtocol(Protocol):
    """Maps instants to billing period keys."""

    def current_period(self, now: Optional[datetime] = None) -> date:
        """Period key for *now*."""
        ...

    def period_for(self, instant: datetime) -> date:
        """Period key containing *instant*."""
        ...

    def next_period(self, period: date) -> date:
        """Key of the following period."""
        ...

    def period_start(self, period: date) -> datetime:
        """First instant of the period."""
        ...

    def period_end(self, period: date) -> datetime:
        """First instant after the period."""
        ...

    def is_period_key(self, value: date) -> bool:
        """Whether *value* names a period (first day of a month)."""
        ...


@runtime_checkable
class UsageLedgerProtocol(Protocol):
    """Per-(account, period) counters.

    ``admit_and_increment`` is the only synchronization point of the service:
    for a given (account, period) concurrent calls are serialized by the
    store, so a limit can never be overshot and no increment is lost.
    """

    async def peek(self, db: AsyncSession, account_id: str, period: date) -> UsageCounts:
        """Current counters, zeroed when nothing was recorded yet. Never mutates."""
        ...

    async def admit_and_increment(
        self,
        db: AsyncSession,
        account_id: str,
        period: date,
        operation: OperationKind,
        limit: Optional[int],
    ) -> Admission:
        """Increment *operation* by one unless its counter already reached *limit*.

        ``limit=None`` means uncapped.
        """
        ...

    async def history(self, db: AsyncSession, account_id: str, limit: int) -> list[PeriodUsage]:
        """Counters of the most recent periods, newest first."""
        ...


@runtime_checkable
class QuotaEnforcerProtocol(Protocol):
    """Admission decision for metered operations."""

    async def record_operation(
        self,
        db: AsyncSession,
        account_id: str,
        operation: OperationKind,
        details: ArtifactDetails,
        *,
        now: Optional[datetime] = None,
        logger: Optional[ContextualLogger] = None,
    ) -> OperationResult:
        """Admit and record one operation.

        Raises NoActiveSubscriptionError or QuotaExceededError when refused;
        StorageUnavailableError when the ledger cannot be reached.
        """
        ...


@runtime_checkable
class UsageQueryServiceProtocol(Protocol):
    """Read-only usage views."""

    async def snapshot(
        self, db: AsyncSession, account_id: str, *, now: Optional[datetime] = None
    ) -> UsageSnapshot:
        """Profile, entitlement, current counters, limits and recent artifacts."""
        ...

    async def usage_history(
        self, db: AsyncSession, account_id: str, *, limit: Optional[int] = None
    ) -> list[UsagePeriod]:
        """Counters of past and current periods, newest first."""
        ...

    async def audit_period(self, db: AsyncSession, account_id: str, period: date) -> PeriodAudit:
        """Compare counters of *period* with the artifacts recorded in it."""
        ...
