"""Unit tests for the shared exception helpers."""

import pytest
from sqlalchemy.exc import OperationalError

from quotaguard.core.exceptions import (
    MalformedRequestError,
    QuotaGuardException,
    StorageUnavailableError,
    wrap_storage_errors,
)


class TestPayloads:
    def test_base_payload(self):
        assert QuotaGuardException("boom").to_payload() == {
            "error": "boom",
            "kind": "internal_error",
        }

    def test_malformed_request_includes_field_errors(self):
        exc = MalformedRequestError("Invalid request", errors={"body.operationType": "bad"})

        assert exc.to_payload() == {
            "error": "Invalid request",
            "kind": "malformed_request",
            "errors": {"body.operationType": "bad"},
        }

    def test_malformed_request_without_field_errors(self):
        assert "errors" not in MalformedRequestError().to_payload()


class TestWrapStorageErrors:
    @pytest.mark.asyncio
    async def test_operational_error_becomes_storage_unavailable(self):
        @wrap_storage_errors
        async def query():
            raise OperationalError("SELECT 1", {}, ConnectionRefusedError())

        with pytest.raises(StorageUnavailableError) as exc_info:
            await query()
        assert isinstance(exc_info.value.__cause__, OperationalError)
        assert exc_info.value.kind == "storage_unavailable"

    @pytest.mark.asyncio
    async def test_other_errors_pass_through(self):
        @wrap_storage_errors
        async def query():
            raise KeyError("missing")

        with pytest.raises(KeyError):
            await query()

    @pytest.mark.asyncio
    async def test_return_value_preserved(self):
        @wrap_storage_errors
        async def query(x):
            return x * 2

        assert await query(21) == 42
