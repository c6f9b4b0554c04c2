"""Shared helpers for usage domain tests."""

from datetime import datetime, timezone

from quotaguard.domains.entitlements.fakes import make_subscription
from quotaguard.domains.entitlements.types import SubscriptionStatus
from quotaguard.domains.usage.types import ArtifactDetails

ACCOUNT_ID = "acct-1"
OTHER_ACCOUNT_ID = "acct-2"

# Mid-March 2025, UTC.
NOW = datetime(2025, 3, 15, 12, 0, tzinfo=timezone.utc)


def _details(n: int = 0) -> ArtifactDetails:
    return ArtifactDetails(artifact_url=f"https://cdn.example.com/img-{n}.png", prompt="a cat")


def _subscribe(repo, account_id: str = ACCOUNT_ID, *, allowance: int = 5, **kwargs):
    """Seed an active subscription with the given allowance."""
    subscription = make_subscription(account_id, allowance=allowance, **kwargs)
    repo.seed(subscription)
    return subscription


def _trial(repo, account_id: str = ACCOUNT_ID, *, allowance: int = 5):
    """Seed a trial subscription."""
    return _subscribe(
        repo,
        account_id,
        allowance=allowance,
        tier_name="Free Trial",
        price_cents=0,
        status=SubscriptionStatus.TRIAL,
    )
