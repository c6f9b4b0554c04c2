"""Fake implementations for usage domain testing."""

from quotaguard.domains.usage.fakes.repository import FakeUsageCounterRepository

__all__ = ["FakeUsageCounterRepository"]
