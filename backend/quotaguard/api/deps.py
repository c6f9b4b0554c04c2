"""Dependencies that are used in the API endpoints."""

import uuid
from typing import Optional, get_type_hints

from fastapi import Depends, Header, Request

from quotaguard.api.context import ApiContext
from quotaguard.core import container as container_mod
from quotaguard.core.config import settings
from quotaguard.core.container import Container
from quotaguard.core.exceptions import UnauthenticatedError
from quotaguard.core.logging import logger
from quotaguard.core.protocols.identity import IdentityProvider
from quotaguard.db.session import get_db  # noqa: F401  re-exported for endpoints


def get_container() -> Container:
    """Get the DI container. Initialized at startup."""
    c = container_mod.container
    if c is None:
        raise RuntimeError("Container not initialized. Call initialize_container() first.")
    return c


# ---------------------------------------------------------------------------
# Protocol Injection
# ---------------------------------------------------------------------------

# Cache of protocol_type → Container field name, built once at first call.
_INJECT_CACHE: dict[type, str] = {}


def _resolve_field_name(protocol_type: type) -> str:
    """Find which Container field matches the given protocol type."""
    if not _INJECT_CACHE:
        for name, hint in get_type_hints(Container).items():
            _INJECT_CACHE[hint] = name

    field_name = _INJECT_CACHE.get(protocol_type)
    if field_name is None:
        available = list(_INJECT_CACHE.values())
        raise TypeError(
            f"No binding for {protocol_type.__name__} in Container. Available fields: {available}"
        )
    return field_name


def Inject(protocol_type: type):  # noqa: N802 — uppercase to match FastAPI convention
    """Resolve a protocol implementation from the DI container.

    Usage in FastAPI endpoints::

        @router.post("/track")
        async def track(enforcer: QuotaEnforcerProtocol = Inject(QuotaEnforcerProtocol)):
            ...
    """
    field_name = _resolve_field_name(protocol_type)

    def _resolve(c: Container = Depends(get_container)):
        return getattr(c, field_name)

    return Depends(_resolve)


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer ...`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_context(
    request: Request,
    authorization: Optional[str] = Header(None),
    identity: IdentityProvider = Inject(IdentityProvider),
) -> ApiContext:
    """Create the API context for the request.

    Raises:
    ------
        UnauthenticatedError: If the identity provider yields no principal.
    """
    request_id = getattr(request.state, "request_id", str(uuid.uuid4()))

    principal = await identity.authenticate(_bearer_token(authorization))
    if principal is None:
        logger.with_context(request_id=request_id).info(
            f"Unauthenticated request to {request.url.path}"
        )
        raise UnauthenticatedError()

    auth_method = "bearer" if settings.AUTH_ENABLED else "static"
    ctx = ApiContext(
        account_id=principal.account_id,
        request_id=request_id,
        email=principal.email,
        auth_method=auth_method,
        logger=logger.with_context(
            request_id=request_id,
            account_id=principal.account_id,
            auth_method=auth_method,
            context_base="api",
        ),
    )
    request.state.account_id = principal.account_id
    return ctx
