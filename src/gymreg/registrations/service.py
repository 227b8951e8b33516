"""RegistrationService - the registration operations end to end."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from gymreg.registrations.gate import AuthorizationGate
from gymreg.registrations.scheduler import RegistrationScheduler
from gymreg.registrations.validator import RegistrationValidator

if TYPE_CHECKING:
    from gymreg.notifications import JobQueue
    from gymreg.state_store import Registration, StateStore

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


class RegistrationService:
    """Runs gate, validation and scheduling in order for each operation.

    Every step is sequential and raises a RegistrationError subclass on
    failure before anything is written.
    """

    def __init__(
        self,
        state_store: StateStore,
        job_queue: JobQueue,
        validator: RegistrationValidator | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self.state_store = state_store
        self.gate = AuthorizationGate(state_store)
        self.validator = validator if validator is not None else RegistrationValidator(state_store)
        self.scheduler = RegistrationScheduler(state_store, job_queue)
        self.page_size = page_size

    def show(self, registration_id: int) -> Registration | None:
        """Get a registration with its student and plan. Not gated."""
        return self.state_store.get_registration(registration_id)

    def index(self, caller_id: int | None, page: int = 1) -> list[Registration]:
        """List one page of registrations, ordered by ID."""
        self.gate.check(caller_id)
        page = max(page, 1)
        return self.state_store.list_registrations(
            limit=self.page_size, offset=(page - 1) * self.page_size
        )

    def store(self, caller_id: int | None, payload: Mapping[str, Any] | None) -> Registration:
        """Create a registration.

        Raises:
            InvalidInput, Unauthorized, StudentNotFound, PlanNotFound,
            PastDateRejected, DuplicateActiveRegistration
        """
        data = self.validator.parse(payload)
        self.gate.check(caller_id)
        student, plan = self.validator.check_references(data.student_id, data.plan_id)
        self.validator.check_end_date(plan, data.start_date)
        self.validator.check_start_date(data.start_date)
        self.validator.check_unique(data.student_id)
        return self.scheduler.create(data, student, plan)

    def update(
        self,
        caller_id: int | None,
        registration_id: int,
        payload: Mapping[str, Any] | None,
    ) -> Registration:
        """Replace a registration's student, plan and start date.

        Neither the start date nor uniqueness is checked on update.

        Raises:
            Unauthorized, InvalidInput, StudentNotFound, PlanNotFound,
            RegistrationNotFound
        """
        self.gate.check(caller_id)
        data = self.validator.parse(payload)
        _, plan = self.validator.check_references(data.student_id, data.plan_id)
        self.validator.check_end_date(plan, data.start_date)
        self.validator.check_registration(registration_id)
        return self.scheduler.update(registration_id, data, plan)

    def delete(self, caller_id: int | None, registration_id: int) -> None:
        """Delete a registration permanently.

        Raises:
            Unauthorized, RegistrationNotFound
        """
        self.gate.check(caller_id)
        self.validator.check_registration(registration_id)
        self.state_store.delete_registration(registration_id)
        logger.info("Deleted registration %s", registration_id)
