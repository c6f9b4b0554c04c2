"""Fake artifact repository for testing."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from quotaguard.core.exceptions import StorageUnavailableError
from quotaguard.models.artifact import ArtifactRecord
from quotaguard.schemas.artifact import ArtifactCreate


class FakeArtifactRepository:
    """In-memory fake for ArtifactRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize empty in-memory store."""
        self._records: list[ArtifactRecord] = []
        self._fail_writes = False

    def fail_writes(self, enabled: bool = True) -> None:
        """Make ``create`` raise StorageUnavailableError while enabled."""
        self._fail_writes = enabled

    def records_for(self, account_id: str) -> list[ArtifactRecord]:
        """All stored records for the account in insertion order."""
        return [r for r in self._records if r.account_id == account_id]

    def seed(self, record: ArtifactRecord) -> None:
        """Add a record directly."""
        self._records.append(record)

    async def create(self, db: AsyncSession, *, obj_in: ArtifactCreate) -> ArtifactRecord:
        """Append a record."""
        if self._fail_writes:
            raise StorageUnavailableError("fake artifact store outage")
        record = ArtifactRecord(
            id=uuid4(),
            account_id=obj_in.account_id,
            operation_type=obj_in.operation_type,
            image_url=obj_in.image_url,
            prompt=obj_in.prompt,
            style=obj_in.style,
            aspect_ratio=obj_in.aspect_ratio,
            artifact_metadata=dict(obj_in.metadata),
            created_at=datetime.now(timezone.utc),
        )
        self._records.append(record)
        return record

    async def get_recent(
        self, db: AsyncSession, *, account_id: str, limit: int
    ) -> list[ArtifactRecord]:
        """Newest records first."""
        records = sorted(self.records_for(account_id), key=lambda r: r.created_at, reverse=True)
        return records[:limit]

    async def count_by_operation(
        self, db: AsyncSession, *, account_id: str, start: datetime, end: datetime
    ) -> dict[str, int]:
        """Count records per operation type in [start, end)."""
        counts: dict[str, int] = {}
        for record in self.records_for(account_id):
            if start <= record.created_at < end:
                counts[record.operation_type] = counts.get(record.operation_type, 0) + 1
        return counts
