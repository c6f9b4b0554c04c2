"""Entitlements domain protocols."""

from typing import Protocol, runtime_checkable

from sqlalchemy.ext.asyncio import AsyncSession

from quotaguard.domains.entitlements.types import Entitlement


@runtime_checkable
class EntitlementResolverProtocol(Protocol):
    """Resolves an account's tier, status and monthly allowance."""

    async def resolve(self, db: AsyncSession, account_id: str) -> Entitlement:
        """Current entitlement; the Free Trial default when no usable subscription exists."""
        ...
