"""Root conftest for pytest configuration and shared fixtures.

This conftest is loaded before both testpaths (tests/ and quotaguard/),
making its fixtures available to centralized tests AND colocated domain tests.
"""

import os

import pytest

# Register pytest-asyncio plugin at the root level
pytest_plugins = ("pytest_asyncio",)

# ---------------------------------------------------------------------------
# Environment variables — must be set before any quotaguard module import
# Uses setdefault so real env vars (CI) are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("POSTGRES_HOST", "localhost")
os.environ.setdefault("POSTGRES_USER", "test_user")
os.environ.setdefault("POSTGRES_PASSWORD", "test_password")
os.environ.setdefault("POSTGRES_DB", "test_db")
os.environ.setdefault("AUTH_ENABLED", "false")
os.environ.setdefault("BILLING_TIMEZONE", "UTC")


# ---------------------------------------------------------------------------
# Shared fake fixtures — individual protocol fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_subscription_repo():
    """Fake SubscriptionRepository with seedable subscriptions."""
    from quotaguard.domains.entitlements.fakes import FakeSubscriptionRepository

    return FakeSubscriptionRepository()


@pytest.fixture
def fake_usage_counter_repo():
    """Fake UsageCounterRepository with a per-key lock."""
    from quotaguard.domains.usage.fakes import FakeUsageCounterRepository

    return FakeUsageCounterRepository()


@pytest.fixture
def fake_artifact_repo():
    """Fake ArtifactRepository that can be told to fail writes."""
    from quotaguard.domains.artifacts.fakes import FakeArtifactRepository

    return FakeArtifactRepository()


@pytest.fixture
def fake_profile_repo():
    """Fake UserProfileRepository."""
    from quotaguard.domains.profiles.fakes import FakeUserProfileRepository

    return FakeUserProfileRepository()


@pytest.fixture
def fake_identity():
    """Fake IdentityProvider with registrable tokens."""
    from quotaguard.adapters.identity.fake import FakeIdentityProvider

    return FakeIdentityProvider()


@pytest.fixture
def fake_health_service():
    """Fake HealthService with a canned response."""
    from quotaguard.core.health.fakes import FakeHealthService

    return FakeHealthService()


# ---------------------------------------------------------------------------
# Real domain services over the fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def billing_calendar():
    """UTC billing calendar."""
    from quotaguard.domains.usage.calendar import BillingCalendar

    return BillingCalendar("UTC")


@pytest.fixture
def entitlement_resolver(fake_subscription_repo):
    """EntitlementResolver over the fake subscription repository, no retry backoff."""
    from quotaguard.domains.entitlements.resolver import EntitlementResolver

    return EntitlementResolver(fake_subscription_repo, retry_attempts=3, retry_wait=0)


@pytest.fixture
def usage_ledger(fake_usage_counter_repo):
    """UsageLedger over the fake counter repository, no retry backoff."""
    from quotaguard.domains.usage.ledger import UsageLedger

    return UsageLedger(fake_usage_counter_repo, retry_attempts=3, retry_wait=0)


@pytest.fixture
def quota_enforcer(entitlement_resolver, billing_calendar, usage_ledger, fake_artifact_repo):
    """QuotaEnforcer with the default policy tables."""
    from quotaguard.domains.usage.enforcer import QuotaEnforcer

    return QuotaEnforcer(
        resolver=entitlement_resolver,
        calendar=billing_calendar,
        ledger=usage_ledger,
        artifact_repo=fake_artifact_repo,
    )


@pytest.fixture
def usage_query_service(
    entitlement_resolver, billing_calendar, usage_ledger, fake_artifact_repo, fake_profile_repo
):
    """UsageQueryService over the fakes."""
    from quotaguard.domains.usage.query_service import UsageQueryService

    return UsageQueryService(
        resolver=entitlement_resolver,
        calendar=billing_calendar,
        ledger=usage_ledger,
        artifact_repo=fake_artifact_repo,
        profile_repo=fake_profile_repo,
        retry_attempts=1,
        retry_wait=0,
    )


# ---------------------------------------------------------------------------
# Test container — fully faked Container for injection
# ---------------------------------------------------------------------------


@pytest.fixture
def test_container(
    fake_health_service,
    fake_identity,
    fake_subscription_repo,
    fake_usage_counter_repo,
    fake_artifact_repo,
    fake_profile_repo,
    billing_calendar,
    entitlement_resolver,
    usage_ledger,
    quota_enforcer,
    usage_query_service,
):
    """A Container with every storage and identity dependency replaced by a fake.

    Usage in tests:
        async def test_something(test_container):
            result = await test_container.quota_enforcer.record_operation(...)
    """
    from quotaguard.core.container import Container

    return Container(
        health=fake_health_service,
        identity=fake_identity,
        subscription_repo=fake_subscription_repo,
        usage_counter_repo=fake_usage_counter_repo,
        artifact_repo=fake_artifact_repo,
        profile_repo=fake_profile_repo,
        billing_calendar=billing_calendar,
        entitlement_resolver=entitlement_resolver,
        usage_ledger=usage_ledger,
        quota_enforcer=quota_enforcer,
        usage_query_service=usage_query_service,
    )


@pytest.fixture
def db():
    """Session placeholder passed through to the fakes, which never touch it."""
    from unittest.mock import AsyncMock

    return AsyncMock()
