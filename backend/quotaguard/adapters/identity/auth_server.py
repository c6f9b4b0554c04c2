"""Auth server identity provider.

Validates bearer tokens against a Supabase-style auth server by calling
``GET {base_url}/auth/v1/user``. A 200 response carries the user object;
anything else means the token is not valid.
"""

from typing import Optional

import httpx

from quotaguard.core.logging import logger
from quotaguard.core.protocols.identity import IdentityProvider, Principal


class AuthServerIdentityProvider(IdentityProvider):
    """Resolve tokens by asking the auth server for the token's user."""

    def __init__(
        self,
        base_url: str,
        *,
        api_key: Optional[str] = None,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the provider.

        Args:
            base_url: Auth server base URL, without trailing slash.
            api_key: Project API key sent as the ``apikey`` header.
            timeout: Seconds to wait for the auth server.
            transport: Optional httpx transport (tests use ``httpx.MockTransport``).
        """
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    async def authenticate(self, token: Optional[str]) -> Optional[Principal]:
        """Return the token's principal, or None when it is missing or rejected.

        An unreachable auth server also yields None: requests are refused
        rather than admitted without an identity.
        """
        if not token:
            return None

        headers = {"Authorization": f"Bearer {token}"}
        if self._api_key:
            headers["apikey"] = self._api_key

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.get(f"{self._base_url}/auth/v1/user", headers=headers)
            except httpx.HTTPError as exc:
                logger.warning(f"Auth server unreachable: {exc.__class__.__name__}: {exc}")
                return None

        if response.status_code != 200:
            logger.debug(f"Auth server rejected token with status {response.status_code}")
            return None

        try:
            user = response.json()
        except ValueError:
            logger.warning("Auth server returned a non-JSON user payload")
            return None

        account_id = user.get("id") if isinstance(user, dict) else None
        if not account_id:
            return None
        return Principal(account_id=str(account_id), email=user.get("email"))
