"""Readiness check for the usage database.

Admission, reads and the artifact log all depend on the migrated schema, not
just on a reachable server, so the check lists the tables the service uses and
fails when any is missing.
"""

import time
from typing import Iterable, Optional

from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncEngine

from quotaguard.core.health.protocols import HealthProbe
from quotaguard.models import (
    ArtifactRecord,
    Subscription,
    SubscriptionTier,
    UsageCounter,
    UserProfile,
)
from quotaguard.schemas.health import CheckStatus, DependencyCheck

REQUIRED_TABLES: tuple[str, ...] = tuple(
    model.__tablename__
    for model in (UsageCounter, ArtifactRecord, Subscription, SubscriptionTier, UserProfile)
)


class PostgresHealthProbe(HealthProbe):
    """Connects to the usage database and verifies the schema is migrated."""

    def __init__(self, engine: AsyncEngine, tables: Optional[Iterable[str]] = None) -> None:
        self._engine = engine
        self._tables = tuple(tables) if tables is not None else REQUIRED_TABLES

    @property
    def name(self) -> str:
        return "postgres"

    async def check(self) -> DependencyCheck:
        start = time.perf_counter()
        async with self._engine.connect() as conn:
            present = set(
                await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
            )
        missing = [t for t in self._tables if t not in present]
        if missing:
            raise RuntimeError(f"schema not migrated, missing tables: {', '.join(missing)}")
        return DependencyCheck(
            status=CheckStatus.up, latency_ms=round((time.perf_counter() - start) * 1000, 2)
        )
