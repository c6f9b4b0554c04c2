"""Health protocols for dependency injection."""

from typing import Protocol, runtime_checkable

from quotaguard.schemas.health import DependencyCheck, ReadinessResponse


@runtime_checkable
class HealthProbe(Protocol):
    """A single infrastructure check.

    Implementations return a ``DependencyCheck`` on success and raise on
    failure; the service handles timeouts and error sanitization.
    """

    @property
    def name(self) -> str:
        """Identifier surfaced in the readiness response."""
        ...

    async def check(self) -> DependencyCheck:
        """Probe the dependency."""
        ...


@runtime_checkable
class HealthServiceProtocol(Protocol):
    """Runs the readiness probes."""

    async def check_readiness(self, *, debug: bool) -> ReadinessResponse:
        """Probe every dependency; any failure means not ready."""
        ...
