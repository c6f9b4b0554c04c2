"""Artifact repository wrapping crud.artifact."""

from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from quotaguard import crud
from quotaguard.models.artifact import ArtifactRecord
from quotaguard.schemas.artifact import ArtifactCreate


class ArtifactRepositoryProtocol(Protocol):
    """Append and read access to the artifact audit trail."""

    async def create(self, db: AsyncSession, *, obj_in: ArtifactCreate) -> ArtifactRecord:
        """Append one artifact record."""
        ...

    async def get_recent(
        self, db: AsyncSession, *, account_id: str, limit: int
    ) -> list[ArtifactRecord]:
        """Newest artifacts for the account."""
        ...

    async def count_by_operation(
        self, db: AsyncSession, *, account_id: str, start: datetime, end: datetime
    ) -> dict[str, int]:
        """Artifact counts per operation type created in [start, end)."""
        ...


class ArtifactRepository(ArtifactRepositoryProtocol):
    """Delegates to the crud.artifact singleton."""

    async def create(self, db: AsyncSession, *, obj_in: ArtifactCreate) -> ArtifactRecord:
        """Append one artifact record."""
        return await crud.artifact.create(db, obj_in=obj_in)

    async def get_recent(
        self, db: AsyncSession, *, account_id: str, limit: int
    ) -> list[ArtifactRecord]:
        """Newest artifacts for the account."""
        return await crud.artifact.get_recent(db, account_id=account_id, limit=limit)

    async def count_by_operation(
        self, db: AsyncSession, *, account_id: str, start: datetime, end: datetime
    ) -> dict[str, int]:
        """Artifact counts per operation type."""
        return await crud.artifact.count_by_operation(
            db, account_id=account_id, start=start, end=end
        )
