"""Main module of the FastAPI application.

Sets up the app, its middleware and the exception handlers that turn domain
errors into ``{error, kind}`` responses.
"""

import os
import subprocess
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from quotaguard.api.middleware import (
    add_request_id,
    exception_logging_middleware,
    log_requests,
    quotaguard_exception_handler,
    validation_exception_handler,
)
from quotaguard.api.v1.api import api_router
from quotaguard.core.config import Environment, settings
from quotaguard.core.exceptions import QuotaGuardException
from quotaguard.core.logging import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the DI container and, when enabled, run alembic migrations."""
    from quotaguard.core.container import initialize_container

    logger.info("Initializing dependency injection container...")
    initialize_container(settings)
    logger.info("Container initialized successfully")

    if settings.RUN_ALEMBIC_MIGRATIONS:
        logger.info("Running alembic migrations...")
        env = os.environ.copy()
        backend_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        env["PYTHONPATH"] = backend_dir
        subprocess.run(
            [sys.executable, "-m", "alembic", "upgrade", "heads"],
            check=True,
            cwd=backend_dir,
            env=env,
        )

    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.include_router(api_router)

# First registered = innermost; the request id must wrap logging and error handling.
app.middleware("http")(exception_logging_middleware)
app.middleware("http")(log_requests)
app.middleware("http")(add_request_id)

app.exception_handler(RequestValidationError)(validation_exception_handler)
app.exception_handler(ValidationError)(validation_exception_handler)
app.exception_handler(QuotaGuardException)(quotaguard_exception_handler)

CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:8080",
    "http://localhost:3000",
]

if settings.ADDITIONAL_CORS_ORIGINS:
    if settings.ENVIRONMENT == Environment.LOCAL:
        CORS_ORIGINS.append("*")
    else:
        CORS_ORIGINS.extend(o.strip() for o in settings.ADDITIONAL_CORS_ORIGINS.split(","))

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
