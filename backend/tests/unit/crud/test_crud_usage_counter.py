"""Unit tests for CRUDUsageCounter.admit_and_increment against a mocked session.

The statements are compiled with the Postgres dialect so the conditional
UPDATE can be checked without a database.
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from quotaguard.core.exceptions import StorageCommitUncertainError, StorageUnavailableError
from quotaguard.crud.crud_usage_counter import usage_counter
from quotaguard.domains.usage.types import UsageCounts

ACCOUNT_ID = "acct-1"
MARCH = date(2025, 3, 1)


def _row(**counts) -> MagicMock:
    row = MagicMock()
    row._mapping = UsageCounts(**counts).as_dict()
    return row


def _result(*, one_or_none=None, one=None) -> MagicMock:
    result = MagicMock()
    result.one_or_none.return_value = one_or_none
    result.one.return_value = one
    return result


def _session(*results) -> MagicMock:
    db = MagicMock()
    db.execute = AsyncMock(side_effect=list(results))
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    return db


def _compiled(db: MagicMock, index: int):
    stmt = db.execute.await_args_list[index].args[0]
    return stmt.compile(dialect=postgresql.dialect())


async def _admit(db, limit):
    return await usage_counter.admit_and_increment(
        db, account_id=ACCOUNT_ID, month=MARCH, field="thumbnails_generated", limit=limit
    )


class TestStatements:
    @pytest.mark.asyncio
    async def test_lazy_insert_ignores_existing_row(self):
        db = _session(_result(), _result(one_or_none=_row(thumbnails_generated=1)))

        await _admit(db, 5)

        sql = str(_compiled(db, 0))
        assert sql.startswith("INSERT INTO usage_tracking")
        assert "ON CONFLICT (account_id, month) DO NOTHING" in sql

    @pytest.mark.asyncio
    async def test_capped_update_checks_limit(self):
        db = _session(_result(), _result(one_or_none=_row(thumbnails_generated=1)))

        await _admit(db, 5)

        compiled = _compiled(db, 1)
        sql = str(compiled)
        assert sql.startswith("UPDATE usage_tracking")
        assert "usage_tracking.thumbnails_generated < " in sql
        assert "RETURNING" in sql
        assert 5 in compiled.params.values()

    @pytest.mark.asyncio
    async def test_uncapped_update_has_no_limit_predicate(self):
        db = _session(_result(), _result(one_or_none=_row(thumbnails_generated=9)))

        await _admit(db, None)

        sql = str(_compiled(db, 1))
        assert "thumbnails_generated <" not in sql


class TestOutcome:
    @pytest.mark.asyncio
    async def test_returned_row_commits_and_admits(self):
        db = _session(_result(), _result(one_or_none=_row(thumbnails_generated=3)))

        admitted, counts = await _admit(db, 5)

        assert admitted is True
        assert counts == UsageCounts(thumbnails_generated=3)
        db.commit.assert_awaited_once()
        db.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_row_rolls_back_and_rereads(self):
        db = _session(
            _result(),
            _result(one_or_none=None),
            _result(one=_row(thumbnails_generated=5, upscales_used=2)),
        )

        admitted, counts = await _admit(db, 5)

        assert admitted is False
        assert counts == UsageCounts(thumbnails_generated=5, upscales_used=2)
        assert db.execute.await_count == 3
        assert str(_compiled(db, 2)).startswith("SELECT usage_tracking.thumbnails_generated")
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()


class TestFailures:
    @pytest.mark.asyncio
    async def test_statement_failure_rolls_back_and_is_retryable(self):
        db = _session(OperationalError("INSERT", {}, ConnectionResetError()))

        with pytest.raises(StorageUnavailableError) as exc_info:
            await _admit(db, 5)

        assert not isinstance(exc_info.value, StorageCommitUncertainError)
        db.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_commit_failure_reports_uncertain_outcome(self):
        db = _session(_result(), _result(one_or_none=_row(thumbnails_generated=1)))
        db.commit.side_effect = OperationalError("COMMIT", {}, ConnectionResetError())

        with pytest.raises(StorageCommitUncertainError):
            await _admit(db, 5)

        db.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_rollback_failure_does_not_mask_original_error(self):
        db = _session(OperationalError("UPDATE", {}, ConnectionResetError()))
        db.rollback.side_effect = ConnectionResetError()

        with pytest.raises(StorageUnavailableError):
            await _admit(db, 5)
