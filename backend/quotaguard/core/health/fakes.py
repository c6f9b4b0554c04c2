"""Fakes for health probes and service, used in unit tests."""

import asyncio

from quotaguard.core.health.protocols import HealthProbe, HealthServiceProtocol
from quotaguard.schemas.health import CheckStatus, DependencyCheck, ReadinessResponse


class FakeHealthService(HealthServiceProtocol):
    """Returns a canned readiness response."""

    def __init__(self) -> None:
        """Initialise with a ``ready`` response."""
        self._response = ReadinessResponse(
            status="ready", checks={"fake": DependencyCheck(status=CheckStatus.up)}
        )

    def set_response(self, response: ReadinessResponse) -> None:
        """Set the canned response."""
        self._response = response

    async def check_readiness(self, *, debug: bool) -> ReadinessResponse:
        """Return the canned response."""
        return self._response


class FakeProbe(HealthProbe):
    """Probe that always succeeds."""

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    async def check(self) -> DependencyCheck:
        return DependencyCheck(status=CheckStatus.up, latency_ms=1.0)


class FakeFailingProbe(HealthProbe):
    """Probe that always raises the given exception."""

    def __init__(self, name: str, exc: Exception) -> None:
        self._name = name
        self._exc = exc

    @property
    def name(self) -> str:
        return self._name

    async def check(self) -> DependencyCheck:
        raise self._exc


class FakeSlowProbe(HealthProbe):
    """Probe that outlives the service timeout."""

    def __init__(self, name: str, delay: float = 10.0) -> None:
        self._name = name
        self._delay = delay

    @property
    def name(self) -> str:
        return self._name

    async def check(self) -> DependencyCheck:
        await asyncio.sleep(self._delay)
        return DependencyCheck(status=CheckStatus.up)
