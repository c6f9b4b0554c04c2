"""Quota enforcer — the admission decision for one metered operation.

Flow for ``record_operation``:

1. resolve the entitlement;
2. refuse operations that need a subscription when none is usable;
3. admit-and-increment in the current period, capped by the tier allowance
   when the operation kind is capped;
4. on admission, append the artifact record.

The increment is the commit point. Appending the artifact is best effort: a
failure there is logged with the ``artifact_gap`` marker and the call still
succeeds, since the count has already been consumed.
"""

from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from quotaguard.core.logging import ContextualLogger
from quotaguard.core.logging import logger as default_logger
from quotaguard.domains.artifacts.repository import ArtifactRepositoryProtocol
from quotaguard.domains.entitlements.protocols import EntitlementResolverProtocol
from quotaguard.domains.usage.exceptions import NoActiveSubscriptionError, QuotaExceededError
from quotaguard.domains.usage.protocols import (
    BillingCalendarProtocol,
    QuotaEnforcerProtocol,
    UsageLedgerProtocol,
)
from quotaguard.domains.usage.types import (
    ALLOWANCE_KIND,
    DEFAULT_CAPPED_OPERATIONS,
    ArtifactDetails,
    OperationKind,
    OperationResult,
)
from quotaguard.schemas.artifact import ArtifactCreate

ARTIFACT_GAP_MARKER = "artifact_gap"


class QuotaEnforcer(QuotaEnforcerProtocol):
    """Decides, counts and records metered operations."""

    def __init__(
        self,
        *,
        resolver: EntitlementResolverProtocol,
        calendar: BillingCalendarProtocol,
        ledger: UsageLedgerProtocol,
        artifact_repo: ArtifactRepositoryProtocol,
        capped_operations: Iterable[OperationKind] = DEFAULT_CAPPED_OPERATIONS,
        subscription_required_operations: Iterable[OperationKind] = tuple(OperationKind),
    ) -> None:
        """Initialize with collaborators and the operation policy tables."""
        self._resolver = resolver
        self._calendar = calendar
        self._ledger = ledger
        self._artifact_repo = artifact_repo
        self._capped = frozenset(capped_operations)
        self._subscription_required = frozenset(subscription_required_operations)

    def is_capped(self, operation: OperationKind) -> bool:
        """Whether admission of *operation* is limited by the tier allowance."""
        return operation in self._capped

    def requires_subscription(self, operation: OperationKind) -> bool:
        """Whether *operation* is refused without an active or trial subscription."""
        return operation in self._subscription_required

    async def record_operation(
        self,
        db: AsyncSession,
        account_id: str,
        operation: OperationKind,
        details: ArtifactDetails,
        *,
        now: Optional[datetime] = None,
        logger: Optional[ContextualLogger] = None,
    ) -> OperationResult:
        """Admit and record one operation for *account_id*."""
        log = (logger or default_logger).with_context(
            account_id=account_id, operation=operation.value
        )

        entitlement = await self._resolver.resolve(db, account_id)
        if not entitlement.has_usable_tier and self.requires_subscription(operation):
            log.info("Rejected: no active subscription")
            raise NoActiveSubscriptionError(operation=operation.value)

        period = self._calendar.current_period(now)
        limit = entitlement.monthly_allowance
        admission = await self._ledger.admit_and_increment(
            db,
            account_id,
            period,
            operation,
            limit if self.is_capped(operation) else None,
        )

        if not admission.admitted:
            log.info(
                f"Rejected: monthly limit reached ({admission.new_count}/{limit})",
                extra={"period": period.isoformat()},
            )
            raise QuotaExceededError(
                operation=operation.value, limit=limit, current_usage=admission.new_count
            )

        await self._append_artifact(db, account_id, operation, details, log)

        current = admission.counts.get(operation if self.is_capped(operation) else ALLOWANCE_KIND)
        log.info(
            f"Admitted: {current}/{limit}",
            extra={"period": period.isoformat(), "tier": entitlement.tier_name},
        )
        return OperationResult(success=True, current_usage=current, limit=limit)

    async def _append_artifact(
        self,
        db: AsyncSession,
        account_id: str,
        operation: OperationKind,
        details: ArtifactDetails,
        log: ContextualLogger,
    ) -> None:
        obj_in = ArtifactCreate(
            account_id=account_id,
            operation_type=operation.value,
            image_url=details.artifact_url,
            prompt=details.prompt,
            style=details.style,
            aspect_ratio=details.aspect_ratio.value if details.aspect_ratio else None,
            metadata=dict(details.metadata or {}),
        )
        try:
            await self._artifact_repo.create(db, obj_in=obj_in)
        except Exception as e:
            # The increment is already committed; the counter stays authoritative.
            log.error(
                f"{ARTIFACT_GAP_MARKER}: counted operation has no artifact record: {e}",
                exc_info=True,
                extra={"marker": ARTIFACT_GAP_MARKER, "image_url": details.artifact_url},
            )
