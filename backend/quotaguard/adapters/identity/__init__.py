"""Identity provider adapters."""

from quotaguard.adapters.identity.auth_server import AuthServerIdentityProvider
from quotaguard.adapters.identity.static import StaticIdentityProvider

__all__ = ["AuthServerIdentityProvider", "StaticIdentityProvider"]
