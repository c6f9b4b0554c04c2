"""Usage tracking and usage snapshot schemas.

Field aliases keep the wire format used by existing clients (camelCase for
request and summary fields, column names for counters).
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_serializer

from quotaguard.domains.usage.types import AspectRatio, OperationKind
from quotaguard.schemas.artifact import Artifact
from quotaguard.schemas.profile import UserProfile


class TrackUsageRequest(BaseModel):
    """Request to record one metered operation."""

    operation_type: OperationKind = Field(..., alias="operationType")
    image_url: str = Field(
        ...,
        min_length=1,
        max_length=4096,
        validation_alias=AliasChoices("imageUrl", "artifactUrl", "image_url"),
        description="Reference to the produced artifact",
    )
    prompt: Optional[str] = Field(None, max_length=4000)
    style: Optional[str] = Field(None, max_length=50)
    aspect_ratio: Optional[AspectRatio] = Field(None, alias="aspectRatio")
    metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("image_url")
    @classmethod
    def strip_image_url(cls, v: str) -> str:
        """Reject whitespace-only artifact references."""
        v = v.strip()
        if not v:
            raise ValueError("imageUrl must not be empty")
        return v

    @field_validator("metadata", mode="before")
    @classmethod
    def default_metadata(cls, v: Any) -> Any:
        """Treat an explicit null as an empty object."""
        return {} if v is None else v


class UsageInfo(BaseModel):
    """Current usage against the limit."""

    current: int
    limit: int


class TrackUsageResponse(BaseModel):
    """Successful admission response."""

    success: bool = True
    usage: UsageInfo


class UsageCounters(BaseModel):
    """Per-kind counters for one billing period."""

    thumbnails_generated: int = 0
    magic_edits_used: int = 0
    upscales_used: int = 0
    background_removals_used: int = 0


class SubscriptionSummary(BaseModel):
    """Entitlement summary in the snapshot."""

    is_subscribed: bool = Field(..., alias="isSubscribed")
    tier: str
    status: str
    current_period_end: Optional[datetime] = Field(None, alias="currentPeriodEnd")
    cancel_at_period_end: Optional[bool] = Field(None, alias="cancelAtPeriodEnd")

    model_config = ConfigDict(populate_by_name=True)

    @model_serializer(mode="wrap")
    def drop_missing_period(self, handler):
        """Omit period fields for accounts without a usable subscription."""
        data = handler(self)
        return {k: v for k, v in data.items() if v is not None}


class UsageLimits(BaseModel):
    """Limits in the snapshot."""

    thumbnails_per_month: int = Field(..., alias="thumbnailsPerMonth")

    model_config = ConfigDict(populate_by_name=True)


class UsageSnapshot(BaseModel):
    """Consolidated read-only view of an account's entitlement and usage."""

    profile: Optional[UserProfile] = None
    subscription: SubscriptionSummary
    usage: UsageCounters
    limits: UsageLimits
    recent_images: List[Artifact] = Field(default_factory=list, alias="recentImages")

    model_config = ConfigDict(populate_by_name=True)


class UsagePeriod(BaseModel):
    """Counters of one past or current billing period."""

    period: date
    usage: UsageCounters


class PeriodAudit(BaseModel):
    """Counter values compared with recorded artifacts for one period.

    ``gaps`` holds counted-but-not-recorded operations per kind; a negative
    value means more artifacts than counts.
    """

    period: date
    counted: UsageCounters
    recorded: Dict[str, int]
    gaps: Dict[str, int]
    consistent: bool
