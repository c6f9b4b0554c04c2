"""Shared error response schemas.

Every failure body carries a human-readable ``error`` and a stable
machine-readable ``kind``. These models only document the shapes in OpenAPI;
the bodies themselves are produced by ``QuotaGuardException.to_payload``.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Generic error body."""

    error: str = Field(..., description="Human-readable error message")
    kind: str = Field(..., description="Stable error identifier")
    errors: Optional[Dict[str, str]] = Field(
        None, description="Per-field validation messages (malformed_request only)"
    )

    model_config = {
        "json_schema_extra": {
            "example": {"error": "No active subscription found", "kind": "no_active_subscription"}
        }
    }


class QuotaExceededResponse(BaseModel):
    """Error body returned when the monthly allowance is used up (HTTP 429)."""

    error: str
    kind: str = "quota_exceeded"
    limit: int
    current_usage: int = Field(..., alias="currentUsage")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "error": "Monthly limit reached",
                "kind": "quota_exceeded",
                "limit": 5,
                "currentUsage": 5,
            }
        },
    }
