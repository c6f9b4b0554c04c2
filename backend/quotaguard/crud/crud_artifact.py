"""CRUD operations for the ArtifactRecord model (append-only)."""

from datetime import datetime, timezone

from sqlalchemy import and_, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from quotaguard.core.exceptions import wrap_storage_errors
from quotaguard.models.artifact import ArtifactRecord
from quotaguard.schemas.artifact import ArtifactCreate


class CRUDArtifact:
    """Insert and read operations for ArtifactRecord."""

    def __init__(self, model: type[ArtifactRecord]):
        """Initialize with the mapped model."""
        self.model = model

    @wrap_storage_errors
    async def create(self, db: AsyncSession, *, obj_in: ArtifactCreate) -> ArtifactRecord:
        """Append an artifact record and commit."""
        record = self.model(
            account_id=obj_in.account_id,
            operation_type=obj_in.operation_type,
            image_url=obj_in.image_url,
            prompt=obj_in.prompt,
            style=obj_in.style,
            aspect_ratio=obj_in.aspect_ratio,
            artifact_metadata=obj_in.metadata,
            created_at=datetime.now(timezone.utc),
        )
        db.add(record)
        try:
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return record

    @wrap_storage_errors
    async def get_recent(
        self, db: AsyncSession, *, account_id: str, limit: int = 10
    ) -> list[ArtifactRecord]:
        """Get the newest artifacts for an account."""
        query = (
            select(self.model)
            .where(self.model.account_id == account_id)
            .order_by(desc(self.model.created_at))
            .limit(limit)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    @wrap_storage_errors
    async def count_by_operation(
        self,
        db: AsyncSession,
        *,
        account_id: str,
        start: datetime,
        end: datetime,
    ) -> dict[str, int]:
        """Count artifacts per operation type created in [start, end)."""
        query = (
            select(self.model.operation_type, func.count(self.model.id))
            .where(
                and_(
                    self.model.account_id == account_id,
                    self.model.created_at >= start,
                    self.model.created_at < end,
                )
            )
            .group_by(self.model.operation_type)
        )
        result = await db.execute(query)
        return {operation: int(count) for operation, count in result.all()}


artifact = CRUDArtifact(ArtifactRecord)
