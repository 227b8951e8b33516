"""RegistrationValidator - admissibility checks for create and update."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from gymreg.registrations.exceptions import (
    DuplicateActiveRegistration,
    InvalidInput,
    PastDateRejected,
    PlanNotFound,
    RegistrationNotFound,
    StudentNotFound,
)
from gymreg.registrations.models import RegistrationInput
from gymreg.registrations.scheduler import add_months
from gymreg.state_store import utcnow

if TYPE_CHECKING:
    from gymreg.state_store import Plan, Registration, StateStore, Student

logger = logging.getLogger(__name__)

DEFAULT_PAST_DATE_TOLERANCE = timedelta(hours=3)


class RegistrationValidator:
    """Runs the registration checks, each raising its own error.

    The order callers are expected to follow is shape, references, then on
    creation the start date and the per-student uniqueness.
    """

    def __init__(
        self,
        state_store: StateStore,
        tolerance: timedelta = DEFAULT_PAST_DATE_TOLERANCE,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize the validator.

        Args:
            state_store: Store used for existence lookups.
            tolerance: How far before now a new start date may lie. Absorbs
                       clock skew between client and server.
            clock: Returns the current time as naive UTC.
        """
        self.state_store = state_store
        self.tolerance = tolerance
        self.clock = clock

    def parse(self, payload: Mapping[str, Any] | None) -> RegistrationInput:
        """Check required fields and their types.

        Raises:
            InvalidInput: If a field is missing or malformed.
        """
        if not isinstance(payload, Mapping):
            raise InvalidInput()
        try:
            return RegistrationInput.model_validate(dict(payload))
        except ValidationError as e:
            logger.info("Invalid registration input: %d error(s)", e.error_count())
            raise InvalidInput() from e

    def check_references(self, student_id: int, plan_id: int) -> tuple[Student, Plan]:
        """Load the referenced student and plan.

        Raises:
            StudentNotFound: If the student doesn't exist.
            PlanNotFound: If the plan doesn't exist.
        """
        student = self.state_store.get_student(student_id)
        if student is None:
            raise StudentNotFound()
        plan = self.state_store.get_plan(plan_id)
        if plan is None:
            raise PlanNotFound()
        return student, plan

    def check_end_date(self, plan: Plan, start_date: datetime) -> None:
        """Reject start dates whose end date falls outside the datetime range.

        Raises:
            InvalidInput: If start_date plus the plan duration is past year 9999.
        """
        try:
            add_months(start_date, plan.duration)
        except (OverflowError, ValueError) as e:
            logger.info("Rejected start date %s: end date out of range", start_date.isoformat())
            raise InvalidInput() from e

    def check_start_date(self, start_date: datetime) -> None:
        """Reject start dates earlier than now minus the tolerance.

        Raises:
            PastDateRejected: If start_date < now - tolerance.
        """
        if start_date < self.clock() - self.tolerance:
            logger.info("Rejected past start date %s", start_date.isoformat())
            raise PastDateRejected()

    def check_unique(self, student_id: int) -> None:
        """Reject a student who already has any registration row.

        Expired registrations count too. The lookup and the later insert are
        not atomic, so two concurrent creations can both pass.

        Raises:
            DuplicateActiveRegistration: If a registration exists for the student.
        """
        if self.state_store.find_registration_by_student(student_id) is not None:
            logger.info("Rejected duplicate registration for student %s", student_id)
            raise DuplicateActiveRegistration()

    def check_registration(self, registration_id: int) -> Registration:
        """Load an existing registration.

        Raises:
            RegistrationNotFound: If it doesn't exist.
        """
        registration = self.state_store.get_registration(registration_id)
        if registration is None:
            raise RegistrationNotFound()
        return registration
