"""Container Factory.

All construction logic lives here. The factory reads settings and builds
the container with environment-appropriate implementations. Broken wiring
(an unknown operation kind in a policy table, an unknown timezone) fails at
startup.
"""

from quotaguard.adapters.health import PostgresHealthProbe
from quotaguard.adapters.identity import AuthServerIdentityProvider, StaticIdentityProvider
from quotaguard.core.config import Settings
from quotaguard.core.container.container import Container
from quotaguard.core.health.service import HealthService
from quotaguard.core.logging import logger
from quotaguard.core.protocols.identity import IdentityProvider
from quotaguard.db.session import health_check_engine
from quotaguard.domains.artifacts.repository import ArtifactRepository
from quotaguard.domains.entitlements.repository import SubscriptionRepository
from quotaguard.domains.entitlements.resolver import EntitlementResolver
from quotaguard.domains.profiles.repository import UserProfileRepository
from quotaguard.domains.usage.calendar import BillingCalendar
from quotaguard.domains.usage.enforcer import QuotaEnforcer
from quotaguard.domains.usage.ledger import UsageLedger
from quotaguard.domains.usage.query_service import UsageQueryService
from quotaguard.domains.usage.repository import UsageCounterRepository
from quotaguard.domains.usage.types import parse_operation_kinds


def create_container(settings: Settings) -> Container:
    """Build container with environment-appropriate implementations.

    Args:
        settings: Application settings (from core/config)

    Returns:
        Fully constructed Container ready for use
    """
    # -----------------------------------------------------------------
    # Repositories
    # -----------------------------------------------------------------
    subscription_repo = SubscriptionRepository()
    usage_counter_repo = UsageCounterRepository()
    artifact_repo = ArtifactRepository()
    profile_repo = UserProfileRepository()

    # -----------------------------------------------------------------
    # Usage domain
    # -----------------------------------------------------------------
    calendar = BillingCalendar(settings.BILLING_TIMEZONE)
    resolver = EntitlementResolver(
        subscription_repo,
        default_allowance=settings.FREE_TRIAL_MONTHLY_ALLOWANCE,
        retry_attempts=settings.STORAGE_RETRY_ATTEMPTS,
        retry_wait=settings.STORAGE_RETRY_WAIT_SECONDS,
    )
    ledger = UsageLedger(
        usage_counter_repo,
        retry_attempts=settings.STORAGE_RETRY_ATTEMPTS,
        retry_wait=settings.STORAGE_RETRY_WAIT_SECONDS,
    )
    enforcer = QuotaEnforcer(
        resolver=resolver,
        calendar=calendar,
        ledger=ledger,
        artifact_repo=artifact_repo,
        capped_operations=parse_operation_kinds(settings.CAPPED_OPERATIONS),
        subscription_required_operations=parse_operation_kinds(
            settings.SUBSCRIPTION_REQUIRED_OPERATIONS
        ),
    )
    query_service = UsageQueryService(
        resolver=resolver,
        calendar=calendar,
        ledger=ledger,
        artifact_repo=artifact_repo,
        profile_repo=profile_repo,
        recent_limit=settings.RECENT_ARTIFACTS_LIMIT,
        history_limit=settings.USAGE_HISTORY_LIMIT,
        retry_attempts=settings.STORAGE_RETRY_ATTEMPTS,
        retry_wait=settings.STORAGE_RETRY_WAIT_SECONDS,
    )

    return Container(
        health=HealthService(
            [PostgresHealthProbe(health_check_engine)], timeout=settings.HEALTH_CHECK_TIMEOUT
        ),
        identity=_create_identity_provider(settings),
        subscription_repo=subscription_repo,
        usage_counter_repo=usage_counter_repo,
        artifact_repo=artifact_repo,
        profile_repo=profile_repo,
        billing_calendar=calendar,
        entitlement_resolver=resolver,
        usage_ledger=ledger,
        quota_enforcer=enforcer,
        usage_query_service=query_service,
    )


def _create_identity_provider(settings: Settings) -> IdentityProvider:
    """Auth server client when auth is enabled, else a fixed local principal."""
    if not settings.AUTH_ENABLED:
        logger.warning(
            f"AUTH_ENABLED is false: every request runs as {settings.LOCAL_ACCOUNT_ID}"
        )
        return StaticIdentityProvider(settings.LOCAL_ACCOUNT_ID)

    if not settings.AUTH_SERVER_URL:
        raise ValueError("AUTH_SERVER_URL must be set when AUTH_ENABLED is true")

    return AuthServerIdentityProvider(
        settings.AUTH_SERVER_URL,
        api_key=settings.AUTH_SERVER_API_KEY,
        timeout=settings.AUTH_TIMEOUT_SECONDS,
    )
