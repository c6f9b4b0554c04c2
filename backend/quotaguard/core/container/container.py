"""Dependency Injection Container.

The container is an immutable dataclass holding protocol implementations.
It has no construction logic; that belongs in the factory.
"""

from dataclasses import dataclass, replace
from typing import Any

from quotaguard.core.health.protocols import HealthServiceProtocol
from quotaguard.core.protocols.identity import IdentityProvider
from quotaguard.domains.artifacts.repository import ArtifactRepositoryProtocol
from quotaguard.domains.entitlements.protocols import EntitlementResolverProtocol
from quotaguard.domains.entitlements.repository import SubscriptionRepositoryProtocol
from quotaguard.domains.profiles.repository import UserProfileRepositoryProtocol
from quotaguard.domains.usage.protocols import (
    BillingCalendarProtocol,
    QuotaEnforcerProtocol,
    UsageLedgerProtocol,
    UsageQueryServiceProtocol,
)
from quotaguard.domains.usage.repository import UsageCounterRepositoryProtocol


@dataclass(frozen=True)
class Container:
    """Immutable container holding all protocol implementations.

    Usage:
        # Production: the global container built by the factory
        from quotaguard.core.container import container
        await container.quota_enforcer.record_operation(...)

        # Testing: construct directly with fakes (see backend/conftest.py)
        test_container = Container(identity=FakeIdentityProvider(), ...)

        # FastAPI endpoints: use Inject() to pull individual protocols
        from quotaguard.api.deps import Inject
        async def track(enforcer: QuotaEnforcerProtocol = Inject(QuotaEnforcerProtocol)):
            ...
    """

    # Readiness check
    health: HealthServiceProtocol

    # Bearer token -> principal
    identity: IdentityProvider

    # Repository protocols (thin wrappers around crud singletons)
    subscription_repo: SubscriptionRepositoryProtocol
    usage_counter_repo: UsageCounterRepositoryProtocol
    artifact_repo: ArtifactRepositoryProtocol
    profile_repo: UserProfileRepositoryProtocol

    # Usage domain
    billing_calendar: BillingCalendarProtocol
    entitlement_resolver: EntitlementResolverProtocol
    usage_ledger: UsageLedgerProtocol
    quota_enforcer: QuotaEnforcerProtocol
    usage_query_service: UsageQueryServiceProtocol

    def replace(self, **changes: Any) -> "Container":
        """Create a new container with some dependencies replaced.

            modified = container.replace(identity=FakeIdentityProvider())
        """
        return replace(self, **changes)
