"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gymreg import __version__
from gymreg.api.dependencies import (
    close_job_queue,
    close_state_store,
    init_job_queue,
    init_settings,
    init_state_store,
)
from gymreg.api.models import APIResponse
from gymreg.api.routes import registrations
from gymreg.config import Settings
from gymreg.logging import sanitize_for_log
from gymreg.notifications import RQJobQueue
from gymreg.registrations import (
    DuplicateActiveRegistration,
    InvalidInput,
    NotFoundError,
    PastDateRejected,
    RegistrationError,
    Unauthorized,
)
from gymreg.state_store import StateStoreError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from gymreg.notifications import JobQueue

logger = logging.getLogger(__name__)

# Past-date and duplicate rejections answer 401, as existing clients expect
ERROR_STATUS: dict[type[RegistrationError], int] = {
    Unauthorized: status.HTTP_401_UNAUTHORIZED,
    InvalidInput: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    PastDateRejected: status.HTTP_401_UNAUTHORIZED,
    DuplicateActiveRegistration: status.HTTP_401_UNAUTHORIZED,
}


def status_for(exc: RegistrationError) -> int:
    """HTTP status for a registration error, walking up its class hierarchy."""
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return status.HTTP_400_BAD_REQUEST


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    init_settings(settings)
    init_state_store(settings.db_path)

    job_queue: JobQueue | None = app.state.job_queue
    if job_queue is None:
        job_queue = RQJobQueue(settings.redis_url, queue_name=settings.queue_name)
    init_job_queue(job_queue)
    logger.info("gymreg API started (db=%s)", sanitize_for_log(settings.db_path))

    yield

    close_job_queue()
    close_state_store()


def create_app(settings: Settings | None = None, job_queue: JobQueue | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Runtime settings. Defaults to Settings.from_env().
        job_queue: Queue for notification jobs. Defaults to an rq queue on
                   settings.redis_url.
    """
    app = FastAPI(
        title="gymreg API",
        description="REST API for gym registrations",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings if settings is not None else Settings.from_env()
    app.state.job_queue = job_queue

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(RegistrationError)
    async def registration_error_handler(_request: Request, exc: RegistrationError) -> JSONResponse:
        return JSONResponse(
            status_code=status_for(exc),
            content=APIResponse[None](data=None, error=exc.message).model_dump(),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        _request: Request, _exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=APIResponse[None](data=None, error=InvalidInput.message).model_dump(),
        )

    @app.exception_handler(StateStoreError)
    async def state_store_error_handler(_request: Request, exc: StateStoreError) -> JSONResponse:
        logger.error("State store failure: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=APIResponse[None](data=None, error="Internal server error").model_dump(),
        )

    app.include_router(registrations.router, prefix="/api/v1")

    return app


# Default app instance
app = create_app()
