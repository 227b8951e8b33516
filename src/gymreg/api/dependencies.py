"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from datetime import timedelta
from typing import Annotated

from fastapi import Depends, Header

from gymreg.config import Settings
from gymreg.notifications import JobQueue  # noqa: TC001
from gymreg.registrations import RegistrationService, RegistrationValidator
from gymreg.state_store import StateStore

# Global Settings instance (initialized on app startup)
_settings: Settings | None = None


def init_settings(settings: Settings) -> Settings:
    """Initialize the global Settings instance."""
    global _settings  # noqa: PLW0603
    _settings = settings
    return _settings


def get_settings() -> Settings:
    """Dependency that provides the Settings, falling back to defaults."""
    if _settings is None:
        return Settings()
    return _settings


SettingsDep = Annotated[Settings, Depends(get_settings)]

# Global StateStore instance (initialized on app startup)
_state_store: StateStore | None = None


def init_state_store(db_path: str = "gymreg.db") -> StateStore:
    """Initialize the global StateStore instance."""
    global _state_store  # noqa: PLW0603
    _state_store = StateStore(db_path)
    return _state_store


def close_state_store() -> None:
    """Close the global StateStore instance."""
    global _state_store  # noqa: PLW0603
    if _state_store is not None:
        _state_store.close()
        _state_store = None


def get_state_store() -> Generator[StateStore, None, None]:
    """Dependency that provides the StateStore instance."""
    if _state_store is None:
        raise RuntimeError("StateStore not initialized. Call init_state_store() first.")
    yield _state_store


StateStoreDep = Annotated[StateStore, Depends(get_state_store)]

# Global JobQueue instance (initialized on app startup)
_job_queue: JobQueue | None = None


def init_job_queue(job_queue: JobQueue) -> None:
    """Initialize the global JobQueue instance."""
    global _job_queue  # noqa: PLW0603
    _job_queue = job_queue


def close_job_queue() -> None:
    """Close the global JobQueue instance."""
    global _job_queue  # noqa: PLW0603
    close = getattr(_job_queue, "close", None)
    if close is not None:
        close()
    _job_queue = None


def get_job_queue() -> Generator[JobQueue, None, None]:
    """Dependency that provides the JobQueue instance."""
    if _job_queue is None:
        raise RuntimeError("JobQueue not initialized. Call init_job_queue() first.")
    yield _job_queue


JobQueueDep = Annotated[JobQueue, Depends(get_job_queue)]


def get_registration_service(
    store: StateStoreDep, job_queue: JobQueueDep, settings: SettingsDep
) -> RegistrationService:
    """Dependency that builds a RegistrationService for the request."""
    validator = RegistrationValidator(
        store, tolerance=timedelta(hours=settings.past_date_tolerance_hours)
    )
    return RegistrationService(
        store, job_queue, validator=validator, page_size=settings.page_size
    )


RegistrationServiceDep = Annotated[RegistrationService, Depends(get_registration_service)]


def get_caller_id(
    x_user_id: Annotated[str | None, Header()] = None,
) -> int | None:
    """Caller identity from the X-User-Id header, set by the upstream auth layer.

    Anything that is not a positive integer is treated as no identity.
    """
    if x_user_id is None or not x_user_id.strip().isdigit():
        return None
    return int(x_user_id)


CallerIdDep = Annotated[int | None, Depends(get_caller_id)]
