"""CRUD operations for the UsageCounter model.

``admit_and_increment`` is the single synchronization point of the service.
It runs two statements in one transaction:

1. ``INSERT ... ON CONFLICT DO NOTHING`` creates the (account, month) row on
   first use. A concurrent insert for the same key blocks on the unique index
   until the first transaction finishes, so exactly one row survives.
2. ``UPDATE ... SET c = c + 1 WHERE ... AND c < :limit RETURNING ...``. The
   row lock taken by the UPDATE serializes concurrent callers for the same
   key; under READ COMMITTED a blocked UPDATE re-checks ``c < :limit``
   against the committed value, so the limit can never be overshot.

A rejected call rolls back, leaving no trace of the lazy insert. A connection
failure during the admitting commit raises StorageCommitUncertainError, which
is never retried: the increment may already be durable.
"""

from datetime import date
from typing import Optional
from uuid import uuid4

from sqlalchemy import and_, desc, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from quotaguard.core.exceptions import (
    TRANSIENT_DB_ERRORS,
    StorageCommitUncertainError,
    wrap_storage_errors,
)
from quotaguard.domains.usage.types import COUNTER_FIELDS, UsageCounts
from quotaguard.models.usage_counter import UsageCounter


async def _safe_rollback(db: AsyncSession) -> None:
    try:
        await db.rollback()
    except Exception:
        # Connection already gone; the server discards the transaction.
        pass


async def _commit_admission(db: AsyncSession) -> None:
    try:
        await db.commit()
    except TRANSIENT_DB_ERRORS as e:
        raise StorageCommitUncertainError(
            f"admit_and_increment commit failed: {e.__class__.__name__}"
        ) from e


class CRUDUsageCounter:
    """CRUD operations for UsageCounter."""

    def __init__(self, model: type[UsageCounter]):
        """Initialize with the mapped model."""
        self.model = model

    def _key(self, account_id: str, month: date):
        return and_(self.model.account_id == account_id, self.model.month == month)

    @wrap_storage_errors
    async def get_for_period(
        self, db: AsyncSession, *, account_id: str, month: date
    ) -> Optional[UsageCounter]:
        """Get the counter row for an account and billing month, if any."""
        result = await db.execute(select(self.model).where(self._key(account_id, month)))
        return result.scalar_one_or_none()

    @wrap_storage_errors
    async def get_history(
        self, db: AsyncSession, *, account_id: str, limit: int = 12
    ) -> list[UsageCounter]:
        """Get counter rows for an account, newest month first."""
        query = (
            select(self.model)
            .where(self.model.account_id == account_id)
            .order_by(desc(self.model.month))
            .limit(limit)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    @wrap_storage_errors
    async def admit_and_increment(
        self,
        db: AsyncSession,
        *,
        account_id: str,
        month: date,
        field: str,
        limit: Optional[int],
    ) -> tuple[bool, UsageCounts]:
        """Conditionally increment *field* by one.

        Args:
            db: Database session
            account_id: Account identifier
            month: First day of the billing month
            field: Counter column to increment
            limit: Admit only while the pre-increment value is below this; None = uncapped

        Returns:
            (admitted, counts) where counts reflect the committed state after the call
        """
        column = getattr(self.model, field)
        counter_columns = [getattr(self.model, name) for name in COUNTER_FIELDS.values()]
        try:
            await db.execute(
                pg_insert(self.model)
                .values(id=uuid4(), account_id=account_id, month=month)
                .on_conflict_do_nothing(index_elements=["account_id", "month"])
            )

            stmt = (
                update(self.model)
                .where(self._key(account_id, month))
                .values({field: column + 1, "modified_at": func.now()})
                .returning(*counter_columns)
                .execution_options(synchronize_session=False)
            )
            if limit is not None:
                stmt = stmt.where(column < limit)

            result = await db.execute(stmt)
            row = result.one_or_none()
            if row is not None:
                counts = UsageCounts(**row._mapping)
                await _commit_admission(db)
                return True, counts

            current = await db.execute(
                select(*counter_columns).where(self._key(account_id, month))
            )
            counts = UsageCounts(**current.one()._mapping)
            await db.rollback()
            return False, counts
        except Exception:
            await _safe_rollback(db)
            raise


usage_counter = CRUDUsageCounter(UsageCounter)
