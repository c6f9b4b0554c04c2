"""Identity provider protocol.

quotaguard does not own accounts or sessions. It only asks an identity
provider who is behind a bearer token.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class Principal:
    """An authenticated account."""

    account_id: str
    email: Optional[str] = None


@runtime_checkable
class IdentityProvider(Protocol):
    """Resolves bearer tokens to principals."""

    async def authenticate(self, token: Optional[str]) -> Optional[Principal]:
        """Principal for *token*, or None when the token is missing or invalid."""
        ...
