"""Unit tests for the readiness check."""

import pytest

from quotaguard.core.health.fakes import FakeFailingProbe, FakeProbe, FakeSlowProbe
from quotaguard.core.health.service import HealthService
from quotaguard.schemas.health import CheckStatus


class TestCheckReadiness:
    """Tests for HealthService.check_readiness."""

    @pytest.mark.asyncio
    async def test_all_up(self):
        svc = HealthService([FakeProbe("postgres")])
        result = await svc.check_readiness(debug=False)

        assert result.status == "ready"
        assert result.checks["postgres"].status == CheckStatus.up

    @pytest.mark.asyncio
    async def test_failure_means_not_ready(self):
        svc = HealthService([FakeFailingProbe("postgres", ConnectionRefusedError("db:5432"))])
        result = await svc.check_readiness(debug=False)

        assert result.status == "not_ready"
        assert result.checks["postgres"].status == CheckStatus.down
        assert result.checks["postgres"].error == "unavailable"

    @pytest.mark.asyncio
    async def test_debug_exposes_error_text(self):
        svc = HealthService([FakeFailingProbe("postgres", ConnectionRefusedError("db:5432"))])
        result = await svc.check_readiness(debug=True)

        assert "db:5432" in result.checks["postgres"].error

    @pytest.mark.asyncio
    async def test_timeout_reported_as_down(self):
        svc = HealthService([FakeSlowProbe("postgres")], timeout=0.05)
        result = await svc.check_readiness(debug=False)

        assert result.status == "not_ready"
        assert result.checks["postgres"].error == "timeout"
