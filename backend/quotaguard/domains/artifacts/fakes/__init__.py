"""Fake implementations for artifact store testing."""

from quotaguard.domains.artifacts.fakes.repository import FakeArtifactRepository

__all__ = ["FakeArtifactRepository"]
