"""Static identity provider for local development (AUTH_ENABLED=false)."""

from typing import Optional

from quotaguard.core.protocols.identity import IdentityProvider, Principal


class StaticIdentityProvider(IdentityProvider):
    """Every request runs as one fixed account, token or not."""

    def __init__(self, account_id: str, email: Optional[str] = None) -> None:
        """Initialize with the account every request is attributed to."""
        self._principal = Principal(account_id=account_id, email=email)

    async def authenticate(self, token: Optional[str]) -> Optional[Principal]:
        """Return the configured principal."""
        return self._principal
