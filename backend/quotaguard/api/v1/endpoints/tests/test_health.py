"""API tests for health endpoints."""

import pytest

from quotaguard.schemas.health import CheckStatus, DependencyCheck, ReadinessResponse


class TestLiveness:
    @pytest.mark.asyncio
    async def test_liveness_needs_no_auth(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestReadiness:
    @pytest.mark.asyncio
    async def test_ready(self, client):
        response = await client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    @pytest.mark.asyncio
    async def test_not_ready_returns_503(self, client, fake_health_service):
        fake_health_service.set_response(
            ReadinessResponse(
                status="not_ready",
                checks={"postgres": DependencyCheck(status=CheckStatus.down, error="unavailable")},
            )
        )

        response = await client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["checks"]["postgres"] == {
            "status": "down",
            "latency_ms": None,
            "error": "unavailable",
        }
