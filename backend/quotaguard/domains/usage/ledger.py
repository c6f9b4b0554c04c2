"""Usage ledger: per-period counters backed by the usage_tracking table."""

from datetime import date
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from quotaguard.core.logging import logger
from quotaguard.core.retry import run_with_storage_retry
from quotaguard.domains.usage.protocols import UsageLedgerProtocol
from quotaguard.domains.usage.repository import UsageCounterRepositoryProtocol
from quotaguard.domains.usage.types import Admission, OperationKind, PeriodUsage, UsageCounts


class UsageLedger(UsageLedgerProtocol):
    """Reads and conditionally increments usage counters.

    Transient storage failures are retried with backoff; when the attempts
    run out the StorageUnavailableError propagates and nothing is admitted.
    """

    def __init__(
        self,
        repo: UsageCounterRepositoryProtocol,
        *,
        retry_attempts: int = 3,
        retry_wait: float = 0.1,
    ) -> None:
        """Initialize with the counter repository."""
        self._repo = repo
        self._retry_attempts = retry_attempts
        self._retry_wait = retry_wait

    async def _call(self, fn, *args, **kwargs):
        return await run_with_storage_retry(
            fn,
            *args,
            attempts=self._retry_attempts,
            wait_multiplier=self._retry_wait,
            **kwargs,
        )

    async def peek(self, db: AsyncSession, account_id: str, period: date) -> UsageCounts:
        """Current counters, zeroed when no row exists."""
        counts = await self._call(self._repo.get_counts, db, account_id=account_id, period=period)
        return counts or UsageCounts()

    async def admit_and_increment(
        self,
        db: AsyncSession,
        account_id: str,
        period: date,
        operation: OperationKind,
        limit: Optional[int],
    ) -> Admission:
        """Increment *operation* for (account, period) unless it reached *limit*."""
        admitted, counts = await self._call(
            self._repo.admit_and_increment,
            db,
            account_id=account_id,
            period=period,
            operation=operation,
            limit=limit,
        )
        admission = Admission(admitted=admitted, operation=operation, counts=counts, limit=limit)
        logger.debug(
            f"Ledger {'admitted' if admitted else 'rejected'} {operation.value} "
            f"for {account_id} in {period.isoformat()}: count={admission.new_count} limit={limit}"
        )
        return admission

    async def history(self, db: AsyncSession, account_id: str, limit: int) -> list[PeriodUsage]:
        """Counters of the most recent periods, newest first."""
        return await self._call(self._repo.get_history, db, account_id=account_id, limit=limit)
