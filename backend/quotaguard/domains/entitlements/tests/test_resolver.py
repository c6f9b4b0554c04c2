"""Unit tests for EntitlementResolver."""

from datetime import datetime, timedelta, timezone

import pytest

from quotaguard.core.exceptions import StorageUnavailableError
from quotaguard.domains.entitlements.fakes import FakeSubscriptionRepository, make_subscription
from quotaguard.domains.entitlements.resolver import EntitlementResolver
from quotaguard.domains.entitlements.types import SubscriptionStatus

ACCOUNT_ID = "acct-1"


def _make_resolver(attempts: int = 3, default_allowance: int = 5):
    repo = FakeSubscriptionRepository()
    resolver = EntitlementResolver(
        repo, default_allowance=default_allowance, retry_attempts=attempts, retry_wait=0
    )
    return resolver, repo


class TestResolve:
    @pytest.mark.asyncio
    async def test_default_without_subscription(self, db):
        resolver, _ = _make_resolver()

        entitlement = await resolver.resolve(db, ACCOUNT_ID)

        assert entitlement.tier_name == "Free Trial"
        assert entitlement.monthly_allowance == 5
        assert entitlement.status == SubscriptionStatus.NONE
        assert not entitlement.has_usable_tier
        assert not entitlement.is_subscribed

    @pytest.mark.asyncio
    async def test_default_allowance_is_configurable(self, db):
        resolver, _ = _make_resolver(default_allowance=3)

        entitlement = await resolver.resolve(db, ACCOUNT_ID)

        assert entitlement.monthly_allowance == 3

    @pytest.mark.asyncio
    async def test_active_subscription(self, db):
        resolver, repo = _make_resolver()
        period_end = datetime(2025, 4, 1, tzinfo=timezone.utc)
        repo.seed(
            make_subscription(
                ACCOUNT_ID, tier_name="Pro", allowance=100, current_period_end=period_end
            )
        )

        entitlement = await resolver.resolve(db, ACCOUNT_ID)

        assert entitlement.tier_name == "Pro"
        assert entitlement.monthly_allowance == 100
        assert entitlement.is_subscribed
        assert entitlement.current_period_end == period_end

    @pytest.mark.asyncio
    async def test_trial_is_usable_but_not_subscribed(self, db):
        resolver, repo = _make_resolver()
        repo.seed(
            make_subscription(
                ACCOUNT_ID, tier_name="Free Trial", allowance=5, status=SubscriptionStatus.TRIAL
            )
        )

        entitlement = await resolver.resolve(db, ACCOUNT_ID)

        assert entitlement.has_usable_tier
        assert not entitlement.is_subscribed

    @pytest.mark.asyncio
    async def test_canceled_subscription_ignored(self, db):
        resolver, repo = _make_resolver()
        repo.seed(make_subscription(ACCOUNT_ID, status=SubscriptionStatus.CANCELED))

        entitlement = await resolver.resolve(db, ACCOUNT_ID)

        assert entitlement.status == SubscriptionStatus.NONE

    @pytest.mark.asyncio
    async def test_newest_usable_subscription_wins(self, db):
        resolver, repo = _make_resolver()
        older = datetime(2025, 1, 1, tzinfo=timezone.utc)
        repo.seed(make_subscription(ACCOUNT_ID, tier_name="Basic", allowance=20, created_at=older))
        repo.seed(
            make_subscription(
                ACCOUNT_ID, tier_name="Pro", allowance=100, created_at=older + timedelta(days=30)
            )
        )

        entitlement = await resolver.resolve(db, ACCOUNT_ID)

        assert entitlement.tier_name == "Pro"

    @pytest.mark.asyncio
    async def test_tier_change_visible_on_next_call(self, db):
        resolver, repo = _make_resolver()
        assert (await resolver.resolve(db, ACCOUNT_ID)).monthly_allowance == 5

        repo.seed(make_subscription(ACCOUNT_ID, allowance=50))

        assert (await resolver.resolve(db, ACCOUNT_ID)).monthly_allowance == 50


class TestRetry:
    @pytest.mark.asyncio
    async def test_transient_failure_retried(self, db):
        resolver, repo = _make_resolver(attempts=3)
        repo.seed(make_subscription(ACCOUNT_ID, allowance=40))
        repo.fail_next(2)

        entitlement = await resolver.resolve(db, ACCOUNT_ID)

        assert entitlement.monthly_allowance == 40
        assert repo.call_count("get_latest_usable") == 3

    @pytest.mark.asyncio
    async def test_exhausted_retries_raise(self, db):
        resolver, repo = _make_resolver(attempts=2)
        repo.fail_next(5)

        with pytest.raises(StorageUnavailableError):
            await resolver.resolve(db, ACCOUNT_ID)
        assert repo.call_count("get_latest_usable") == 2
