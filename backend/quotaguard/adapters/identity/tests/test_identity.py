"""Tests for the identity provider adapters."""

import httpx
import pytest

from quotaguard.adapters.identity import AuthServerIdentityProvider, StaticIdentityProvider
from quotaguard.core.protocols.identity import IdentityProvider, Principal

BASE_URL = "https://auth.example.com"


def _provider(handler, **kwargs) -> AuthServerIdentityProvider:
    return AuthServerIdentityProvider(
        BASE_URL, transport=httpx.MockTransport(handler), **kwargs
    )


class TestAuthServerIdentityProvider:
    @pytest.mark.asyncio
    async def test_valid_token(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["authorization"] = request.headers.get("authorization")
            seen["apikey"] = request.headers.get("apikey")
            return httpx.Response(200, json={"id": "user-123", "email": "u@example.com"})

        principal = await _provider(handler, api_key="anon-key").authenticate("tok")

        assert principal == Principal(account_id="user-123", email="u@example.com")
        assert seen == {
            "url": f"{BASE_URL}/auth/v1/user",
            "authorization": "Bearer tok",
            "apikey": "anon-key",
        }

    @pytest.mark.asyncio
    async def test_missing_token_skips_the_call(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={"id": "user-123"})

        assert await _provider(handler).authenticate(None) is None
        assert calls == []

    @pytest.mark.asyncio
    async def test_rejected_token(self):
        provider = _provider(lambda request: httpx.Response(401, json={"msg": "invalid JWT"}))

        assert await provider.authenticate("expired") is None

    @pytest.mark.asyncio
    async def test_unreachable_server_is_unauthenticated(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        assert await _provider(handler).authenticate("tok") is None

    @pytest.mark.asyncio
    async def test_payload_without_id(self):
        provider = _provider(lambda request: httpx.Response(200, json={"email": "u@example.com"}))

        assert await provider.authenticate("tok") is None

    @pytest.mark.asyncio
    async def test_non_json_payload(self):
        provider = _provider(lambda request: httpx.Response(200, text="<html>"))

        assert await provider.authenticate("tok") is None

    def test_trailing_slash_stripped(self):
        provider = AuthServerIdentityProvider(f"{BASE_URL}/")

        assert provider._base_url == BASE_URL

    def test_satisfies_protocol(self):
        assert isinstance(AuthServerIdentityProvider(BASE_URL), IdentityProvider)


class TestStaticIdentityProvider:
    @pytest.mark.asyncio
    async def test_every_request_is_the_local_account(self):
        provider = StaticIdentityProvider("local-dev-account")

        assert (await provider.authenticate(None)).account_id == "local-dev-account"
        assert (await provider.authenticate("anything")).account_id == "local-dev-account"
