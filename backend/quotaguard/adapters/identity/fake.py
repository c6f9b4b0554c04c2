"""Fake identity provider for testing."""

from typing import Optional

from quotaguard.core.protocols.identity import IdentityProvider, Principal


class FakeIdentityProvider(IdentityProvider):
    """Maps known tokens to principals; every other token is rejected."""

    def __init__(self) -> None:
        """Initialize with no known tokens."""
        self._tokens: dict[str, Principal] = {}
        self.seen_tokens: list[Optional[str]] = []

    def register(self, token: str, account_id: str, email: Optional[str] = None) -> None:
        """Accept *token* as *account_id*."""
        self._tokens[token] = Principal(account_id=account_id, email=email)

    async def authenticate(self, token: Optional[str]) -> Optional[Principal]:
        """Look up the token."""
        self.seen_tokens.append(token)
        if token is None:
            return None
        return self._tokens.get(token)
