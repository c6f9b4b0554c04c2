"""Schemas for the application."""

from .artifact import Artifact, ArtifactCreate
from .health import CheckStatus, DependencyCheck, LivenessResponse, ReadinessResponse
from .errors import ErrorResponse, QuotaExceededResponse
from .profile import UserProfile
from .usage import (
    PeriodAudit,
    SubscriptionSummary,
    TrackUsageRequest,
    TrackUsageResponse,
    UsageCounters,
    UsageInfo,
    UsageLimits,
    UsagePeriod,
    UsageSnapshot,
)

__all__ = [
    "Artifact",
    "ArtifactCreate",
    "CheckStatus",
    "DependencyCheck",
    "ErrorResponse",
    "LivenessResponse",
    "PeriodAudit",
    "QuotaExceededResponse",
    "ReadinessResponse",
    "SubscriptionSummary",
    "TrackUsageRequest",
    "TrackUsageResponse",
    "UsageCounters",
    "UsageInfo",
    "UsageLimits",
    "UsagePeriod",
    "UsageSnapshot",
    "UserProfile",
]
