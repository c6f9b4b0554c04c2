"""Fake implementations for profile testing."""

from quotaguard.domains.profiles.fakes.repository import FakeUserProfileRepository

__all__ = ["FakeUserProfileRepository"]
