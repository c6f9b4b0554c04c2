"""Unit tests for the Postgres readiness check against a mocked engine."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from quotaguard.adapters.health.postgres import REQUIRED_TABLES, PostgresHealthProbe
from quotaguard.core.health.service import HealthService
from quotaguard.schemas.health import CheckStatus


def _engine(table_names) -> MagicMock:
    conn = MagicMock()
    conn.run_sync = AsyncMock(return_value=list(table_names))
    connection_cm = MagicMock()
    connection_cm.__aenter__ = AsyncMock(return_value=conn)
    connection_cm.__aexit__ = AsyncMock(return_value=False)
    engine = MagicMock()
    engine.connect.return_value = connection_cm
    return engine


def test_required_tables_cover_ledger_and_artifacts():
    assert "usage_tracking" in REQUIRED_TABLES
    assert "generated_images" in REQUIRED_TABLES
    assert "user_subscriptions" in REQUIRED_TABLES


@pytest.mark.asyncio
async def test_migrated_schema_is_up():
    engine = _engine([*REQUIRED_TABLES, "alembic_version"])

    result = await PostgresHealthProbe(engine).check()

    assert result.status == CheckStatus.up
    assert result.latency_ms is not None
    engine.connect.assert_called_once()


@pytest.mark.asyncio
async def test_missing_ledger_table_raises():
    engine = _engine([t for t in REQUIRED_TABLES if t != "usage_tracking"])

    with pytest.raises(RuntimeError, match="usage_tracking"):
        await PostgresHealthProbe(engine).check()


@pytest.mark.asyncio
async def test_missing_table_makes_service_not_ready():
    svc = HealthService([PostgresHealthProbe(_engine([]))])

    result = await svc.check_readiness(debug=True)

    assert result.status == "not_ready"
    assert result.checks["postgres"].status == CheckStatus.down
    assert "schema not migrated" in result.checks["postgres"].error


@pytest.mark.asyncio
async def test_connection_failure_propagates():
    engine = MagicMock()
    engine.connect.side_effect = ConnectionRefusedError("db:5432")

    with pytest.raises(ConnectionRefusedError):
        await PostgresHealthProbe(engine).check()
