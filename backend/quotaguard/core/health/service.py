"""HealthService — readiness check over the storage dependencies.

Admission fails closed when storage is down, so readiness reports the same
dependencies the ledger needs.
"""

import asyncio
from collections.abc import Sequence

from quotaguard.core.health.protocols import HealthProbe, HealthServiceProtocol
from quotaguard.schemas.health import CheckStatus, DependencyCheck, ReadinessResponse


class HealthService(HealthServiceProtocol):
    """Concrete ``HealthServiceProtocol`` implementation."""

    def __init__(self, probes: Sequence[HealthProbe], *, timeout: float = 5.0) -> None:
        """Initialise with the probes to run."""
        self._probes = probes
        self._timeout = timeout

    async def check_readiness(self, *, debug: bool) -> ReadinessResponse:
        """Run all probes concurrently; ready only when every probe is up."""
        results = await asyncio.gather(*(self._run_probe(p, debug) for p in self._probes))
        checks = dict(results)
        ready = all(check.status == CheckStatus.up for check in checks.values())
        return ReadinessResponse(status="ready" if ready else "not_ready", checks=checks)

    async def _run_probe(self, probe: HealthProbe, debug: bool) -> tuple[str, DependencyCheck]:
        try:
            return probe.name, await asyncio.wait_for(probe.check(), timeout=self._timeout)
        except asyncio.TimeoutError:
            return probe.name, DependencyCheck(status=CheckStatus.down, error="timeout")
        except Exception as exc:
            # Hostnames and ports stay out of production responses.
            error = str(exc) if debug else "unavailable"
            return probe.name, DependencyCheck(status=CheckStatus.down, error=error)
