"""Usage query service: read-only views over entitlement, counters and artifacts."""

from datetime import date, datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from quotaguard.core.retry import run_with_storage_retry
from quotaguard.domains.artifacts.repository import ArtifactRepositoryProtocol
from quotaguard.domains.entitlements.protocols import EntitlementResolverProtocol
from quotaguard.domains.entitlements.types import Entitlement
from quotaguard.domains.profiles.repository import UserProfileRepositoryProtocol
from quotaguard.domains.usage.protocols import (
    BillingCalendarProtocol,
    UsageLedgerProtocol,
    UsageQueryServiceProtocol,
)
from quotaguard.domains.usage.types import COUNTER_FIELDS, UsageCounts
from quotaguard.schemas.artifact import Artifact
from quotaguard.schemas.profile import UserProfile
from quotaguard.schemas.usage import (
    PeriodAudit,
    SubscriptionSummary,
    UsageCounters,
    UsageLimits,
    UsagePeriod,
    UsageSnapshot,
)


def _summarize(entitlement: Entitlement) -> SubscriptionSummary:
    if not entitlement.has_usable_tier:
        return SubscriptionSummary(
            is_subscribed=False, tier=entitlement.tier_name, status=entitlement.status.value
        )
    return SubscriptionSummary(
        is_subscribed=entitlement.is_subscribed,
        tier=entitlement.tier_name,
        status=entitlement.status.value,
        current_period_end=entitlement.current_period_end,
        cancel_at_period_end=entitlement.cancel_at_period_end,
    )


def _counters(counts: UsageCounts) -> UsageCounters:
    return UsageCounters(**counts.as_dict())


class UsageQueryService(UsageQueryServiceProtocol):
    """Builds the usage snapshot, usage history and period audit."""

    def __init__(
        self,
        *,
        resolver: EntitlementResolverProtocol,
        calendar: BillingCalendarProtocol,
        ledger: UsageLedgerProtocol,
        artifact_repo: ArtifactRepositoryProtocol,
        profile_repo: UserProfileRepositoryProtocol,
        recent_limit: int = 10,
        history_limit: int = 12,
        retry_attempts: int = 3,
        retry_wait: float = 0.1,
    ) -> None:
        """Initialize with collaborators and read limits."""
        self._resolver = resolver
        self._calendar = calendar
        self._ledger = ledger
        self._artifact_repo = artifact_repo
        self._profile_repo = profile_repo
        self._recent_limit = recent_limit
        self._history_limit = history_limit
        self._retry_attempts = retry_attempts
        self._retry_wait = retry_wait

    async def snapshot(
        self, db: AsyncSession, account_id: str, *, now: Optional[datetime] = None
    ) -> UsageSnapshot:
        """Profile, entitlement, current-period counters, limits and recent artifacts.

        Reads run sequentially: they share one session.
        """
        period = self._calendar.current_period(now)
        profile = await run_with_storage_retry(
            self._profile_repo.get,
            db,
            account_id=account_id,
            attempts=self._retry_attempts,
            wait_multiplier=self._retry_wait,
        )
        entitlement = await self._resolver.resolve(db, account_id)
        counts = await self._ledger.peek(db, account_id, period)
        recent = await run_with_storage_retry(
            self._artifact_repo.get_recent,
            db,
            account_id=account_id,
            limit=self._recent_limit,
            attempts=self._retry_attempts,
            wait_multiplier=self._retry_wait,
        )
        return UsageSnapshot(
            profile=UserProfile.model_validate(profile) if profile else None,
            subscription=_summarize(entitlement),
            usage=_counters(counts),
            limits=UsageLimits(thumbnails_per_month=entitlement.monthly_allowance),
            recent_images=[Artifact.model_validate(r) for r in recent],
        )

    async def usage_history(
        self, db: AsyncSession, account_id: str, *, limit: Optional[int] = None
    ) -> list[UsagePeriod]:
        """Counters of stored periods, newest first."""
        periods = await self._ledger.history(db, account_id, limit or self._history_limit)
        return [UsagePeriod(period=p.period, usage=_counters(p.counts)) for p in periods]

    async def audit_period(self, db: AsyncSession, account_id: str, period: date) -> PeriodAudit:
        """Compare counters of *period* with the artifacts recorded in it.

        A positive gap means operations were counted without an artifact
        record (the ``artifact_gap`` case). Artifacts are bucketed by their
        own timestamp, so an operation admitted in the last instant of a month
        can land in the next one.
        """
        counts = await self._ledger.peek(db, account_id, period)
        recorded = await run_with_storage_retry(
            self._artifact_repo.count_by_operation,
            db,
            account_id=account_id,
            start=self._calendar.period_start(period),
            end=self._calendar.period_end(period),
            attempts=self._retry_attempts,
            wait_multiplier=self._retry_wait,
        )
        gaps = {
            kind.value: counts.get(kind) - recorded.get(kind.value, 0) for kind in COUNTER_FIELDS
        }
        return PeriodAudit(
            period=period,
            counted=_counters(counts),
            recorded={kind.value: recorded.get(kind.value, 0) for kind in COUNTER_FIELDS},
            gaps=gaps,
            consistent=all(gap == 0 for gap in gaps.values()),
        )
