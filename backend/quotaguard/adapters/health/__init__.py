"""Health probe adapters."""

from quotaguard.adapters.health.postgres import PostgresHealthProbe

__all__ = ["PostgresHealthProbe"]
