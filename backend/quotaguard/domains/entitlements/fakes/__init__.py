"""Fake implementations for entitlements domain testing."""

from quotaguard.domains.entitlements.fakes.repository import (
    FakeSubscriptionRepository,
    make_subscription,
)

__all__ = ["FakeSubscriptionRepository", "make_subscription"]
