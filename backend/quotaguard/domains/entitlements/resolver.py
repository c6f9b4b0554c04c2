"""Entitlement resolver.

Catalog data is read on every call; there is no cache, so a tier change is
visible to the very next request.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from quotaguard.core.retry import run_with_storage_retry
from quotaguard.domains.entitlements.protocols import EntitlementResolverProtocol
from quotaguard.domains.entitlements.repository import SubscriptionRepositoryProtocol
from quotaguard.domains.entitlements.types import (
    FREE_TRIAL_MONTHLY_ALLOWANCE,
    Entitlement,
    default_entitlement,
    entitlement_from_subscription,
)


class EntitlementResolver(EntitlementResolverProtocol):
    """Resolves entitlements from the subscription catalog."""

    def __init__(
        self,
        subscription_repo: SubscriptionRepositoryProtocol,
        *,
        default_allowance: int = FREE_TRIAL_MONTHLY_ALLOWANCE,
        retry_attempts: int = 3,
        retry_wait: float = 0.1,
    ) -> None:
        """Initialize with the subscription repository."""
        self._subscription_repo = subscription_repo
        self._default_allowance = default_allowance
        self._retry_attempts = retry_attempts
        self._retry_wait = retry_wait

    async def resolve(self, db: AsyncSession, account_id: str) -> Entitlement:
        """Entitlement from the newest active-or-trial subscription, else Free Trial."""
        subscription = await run_with_storage_retry(
            self._subscription_repo.get_latest_usable,
            db,
            account_id=account_id,
            attempts=self._retry_attempts,
            wait_multiplier=self._retry_wait,
        )
        if subscription is None:
            return default_entitlement(self._default_allowance)
        return entitlement_from_subscription(subscription)
