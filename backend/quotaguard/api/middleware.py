"""Middleware and exception handlers for the FastAPI application."""

import time
import traceback
import uuid

from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from quotaguard.core.config import settings
from quotaguard.core.exceptions import (
    MalformedRequestError,
    QuotaGuardException,
    StorageUnavailableError,
    UnauthenticatedError,
    unpack_validation_error,
)
from quotaguard.core.logging import logger
from quotaguard.domains.usage.exceptions import NoActiveSubscriptionError, QuotaExceededError

# Status code per exception class. Subclasses inherit the code of their
# nearest mapped base.
STATUS_CODES: dict[type[QuotaGuardException], int] = {
    UnauthenticatedError: 401,
    NoActiveSubscriptionError: 403,
    QuotaExceededError: 429,
    MalformedRequestError: 400,
    StorageUnavailableError: 503,
}


def status_code_for(exc: QuotaGuardException) -> int:
    """HTTP status for a domain exception; 500 when unmapped."""
    for klass in type(exc).__mro__:
        if klass in STATUS_CODES:
            return STATUS_CODES[klass]
    return 500


async def add_request_id(request: Request, call_next: callable) -> Response:
    """Attach a request ID for tracing, honouring an incoming X-Request-ID."""
    request.state.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    response = await call_next(request)
    response.headers["X-Request-ID"] = request.state.request_id
    return response


async def log_requests(request: Request, call_next: callable) -> Response:
    """Log every handled request with its status and duration."""
    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time
    logger.with_context(request_id=getattr(request.state, "request_id", "")).info(
        f"Handled request {request.method} {request.url.path} in {duration:.3f} seconds. "
        f"Response code: {response.status_code}"
    )
    return response


async def exception_logging_middleware(request: Request, call_next: callable) -> Response:
    """Turn unhandled exceptions into logged 500 responses."""
    try:
        return await call_next(request)
    except Exception as exc:
        logger.error(f"Unhandled exception: {exc}\n{traceback.format_exc()}")
        content = {"error": "Internal server error", "kind": "internal_error"}
        if settings.DEBUG:
            content["trace"] = traceback.format_exc()
        return JSONResponse(status_code=500, content=content)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError | ValidationError
) -> JSONResponse:
    """Map request validation failures to 400 malformed_request.

    Runs before any storage access, so a malformed request never touches the
    ledger.
    """
    errors = unpack_validation_error(exc)
    logger.info(f"Malformed request to {request.url.path}: {errors}")
    error = MalformedRequestError("Invalid request: " + "; ".join(errors.values()), errors=errors)
    return JSONResponse(status_code=400, content=error.to_payload())


async def quotaguard_exception_handler(request: Request, exc: QuotaGuardException) -> JSONResponse:
    """Render any domain exception as ``{error, kind, ...}`` with its mapped status."""
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"{exc.kind}: {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.to_payload())
