"""CRUD singletons.

Usage:
    from quotaguard import crud
    await crud.usage_counter.get_for_period(db, account_id=..., month=...)
"""

from .crud_artifact import artifact
from .crud_subscription import subscription
from .crud_usage_counter import usage_counter
from .crud_user_profile import user_profile

__all__ = ["artifact", "subscription", "usage_counter", "user_profile"]
