"""Health sub-package — readiness probes."""

from quotaguard.core.health.protocols import HealthProbe, HealthServiceProtocol
from quotaguard.core.health.service import HealthService

__all__ = ["HealthProbe", "HealthService", "HealthServiceProtocol"]
