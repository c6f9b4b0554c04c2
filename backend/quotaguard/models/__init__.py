"""Models for the application."""

from ._base import Base
from .artifact import ArtifactRecord
from .subscription import Subscription
from .subscription_tier import SubscriptionTier
from .usage_counter import UsageCounter
from .user_profile import UserProfile

__all__ = [
    "Base",
    "ArtifactRecord",
    "Subscription",
    "SubscriptionTier",
    "UsageCounter",
    "UserProfile",
]
