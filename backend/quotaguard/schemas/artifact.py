"""Artifact record schemas."""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ArtifactCreate(BaseModel):
    """Schema for appending an artifact record."""

    account_id: str
    operation_type: str
    image_url: str
    prompt: Optional[str] = None
    style: Optional[str] = None
    aspect_ratio: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class Artifact(BaseModel):
    """Artifact record as returned to callers."""

    id: UUID
    account_id: str = Field(
        ..., validation_alias=AliasChoices("account_id", "user_id"), serialization_alias="user_id"
    )
    operation_type: str
    image_url: str
    prompt: Optional[str] = None
    style: Optional[str] = None
    aspect_ratio: Optional[str] = None
    # ORM rows expose the column as artifact_metadata; dumped payloads as metadata.
    metadata: Dict[str, Any] = Field(
        default_factory=dict, validation_alias=AliasChoices("artifact_metadata", "metadata")
    )
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
