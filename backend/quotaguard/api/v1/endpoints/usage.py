"""API endpoints for metered usage.

``POST /usage/track`` is the admission point for every billable operation;
the read endpoints never mutate anything.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from quotaguard import schemas
from quotaguard.api import deps
from quotaguard.api.context import ApiContext
from quotaguard.api.deps import Inject
from quotaguard.core.exceptions import MalformedRequestError
from quotaguard.domains.usage.protocols import (
    BillingCalendarProtocol,
    QuotaEnforcerProtocol,
    UsageQueryServiceProtocol,
)
from quotaguard.domains.usage.types import ArtifactDetails

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": schemas.ErrorResponse},
    401: {"model": schemas.ErrorResponse},
    503: {"model": schemas.ErrorResponse},
}


@router.post(
    "/track",
    response_model=schemas.TrackUsageResponse,
    responses={
        **_ERROR_RESPONSES,
        403: {"model": schemas.ErrorResponse},
        429: {"model": schemas.QuotaExceededResponse},
    },
)
async def track_usage(
    request: schemas.TrackUsageRequest,
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    enforcer: QuotaEnforcerProtocol = Inject(QuotaEnforcerProtocol),
) -> schemas.TrackUsageResponse:
    """Admit, count and record one billable operation.

    Args:
        request: Operation kind and a reference to the produced artifact
        db: Database session
        ctx: API context
        enforcer: Quota enforcer

    Returns:
        Usage against the limit after the operation was counted
    """
    result = await enforcer.record_operation(
        db,
        ctx.account_id,
        request.operation_type,
        ArtifactDetails(
            artifact_url=request.image_url,
            prompt=request.prompt,
            style=request.style,
            aspect_ratio=request.aspect_ratio,
            metadata=request.metadata,
        ),
        logger=ctx.logger,
    )
    return schemas.TrackUsageResponse(
        success=result.success,
        usage=schemas.UsageInfo(current=result.current_usage, limit=result.limit),
    )


@router.get("/me", response_model=schemas.UsageSnapshot, responses=_ERROR_RESPONSES)
async def get_my_usage(
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    query_service: UsageQueryServiceProtocol = Inject(UsageQueryServiceProtocol),
) -> schemas.UsageSnapshot:
    """Profile, subscription, current-period usage, limits and recent images."""
    return await query_service.snapshot(db, ctx.account_id)


@router.get("/history", response_model=List[schemas.UsagePeriod], responses=_ERROR_RESPONSES)
async def get_usage_history(
    limit: Optional[int] = Query(None, ge=1, le=120, description="Number of periods"),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    query_service: UsageQueryServiceProtocol = Inject(UsageQueryServiceProtocol),
) -> List[schemas.UsagePeriod]:
    """Per-period counters, newest period first."""
    return await query_service.usage_history(db, ctx.account_id, limit=limit)


@router.get("/audit", response_model=schemas.PeriodAudit, responses=_ERROR_RESPONSES)
async def audit_usage_period(
    period: date = Query(..., description="Billing period key, e.g. 2025-03-01"),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    calendar: BillingCalendarProtocol = Inject(BillingCalendarProtocol),
    query_service: UsageQueryServiceProtocol = Inject(UsageQueryServiceProtocol),
) -> schemas.PeriodAudit:
    """Compare a period's counters with the artifacts recorded in it."""
    if not calendar.is_period_key(period):
        raise MalformedRequestError(
            "period must be the first day of a month", errors={"query.period": "not a period key"}
        )
    return await query_service.audit_period(db, ctx.account_id, period)
