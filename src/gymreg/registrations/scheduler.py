"""RegistrationScheduler - derived fields, persistence and the mail job."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from dateutil.relativedelta import relativedelta

from gymreg.notifications import REGISTRATION_MAIL_KEY
from gymreg.registrations.models import DerivedFields

if TYPE_CHECKING:
    from datetime import datetime

    from gymreg.notifications import JobQueue
    from gymreg.registrations.models import RegistrationInput
    from gymreg.state_store import Plan, Registration, StateStore, Student

logger = logging.getLogger(__name__)


def add_months(start: datetime, months: int) -> datetime:
    """Add whole calendar months.

    The day of month is kept when the target month has it, otherwise it is
    clamped to that month's last day (Jan 31 + 1 month is Feb 28, or Feb 29 in
    a leap year). Time of day is kept.
    """
    return start + relativedelta(months=months)


def compute_price(plan: Plan) -> Decimal:
    """Flat price of a plan: monthly price times duration."""
    return Decimal(plan.price) * plan.duration


def derive(plan: Plan, start_date: datetime) -> DerivedFields:
    """End date and price for a registration on this plan starting then."""
    return DerivedFields(
        end_date=add_months(start_date, plan.duration),
        price=compute_price(plan),
    )


def notification_payload(student: Student, plan: Plan, end_date: datetime) -> dict[str, Any]:
    """JSON-safe snapshot of what the confirmation mail needs."""
    return {
        "student": {"id": student.id, "name": student.name, "email": student.email},
        "end_date": end_date.isoformat(),
        "plan": {
            "id": plan.id,
            "title": plan.title,
            "price": str(plan.price),
            "duration": plan.duration,
        },
    }


class RegistrationScheduler:
    """Computes derived fields, writes registrations and queues the mail."""

    def __init__(self, state_store: StateStore, job_queue: JobQueue) -> None:
        """Initialize the scheduler.

        Args:
            state_store: Store the registrations are written to.
            job_queue: Queue that receives the confirmation mail job.
        """
        self.state_store = state_store
        self.job_queue = job_queue

    def create(self, data: RegistrationInput, student: Student, plan: Plan) -> Registration:
        """Persist a new registration, then queue its confirmation mail."""
        derived = derive(plan, data.start_date)
        registration = self.state_store.create_registration(
            student_id=data.student_id,
            plan_id=data.plan_id,
            start_date=data.start_date,
            end_date=derived.end_date,
            price=derived.price,
        )
        logger.info(
            "Created registration %s for student %s (plan %s, until %s)",
            registration.id,
            student.id,
            plan.id,
            derived.end_date.isoformat(),
        )
        self.notify(student, plan, derived.end_date)
        return registration

    def update(self, registration_id: int, data: RegistrationInput, plan: Plan) -> Registration:
        """Replace a registration's fields, recomputing end date and price."""
        derived = derive(plan, data.start_date)
        registration = self.state_store.update_registration(
            registration_id,
            student_id=data.student_id,
            plan_id=data.plan_id,
            start_date=data.start_date,
            end_date=derived.end_date,
            price=derived.price,
        )
        logger.info("Updated registration %s", registration_id)
        return registration

    def notify(self, student: Student, plan: Plan, end_date: datetime) -> None:
        """Queue the confirmation mail. Failures are logged, never raised."""
        try:
            self.job_queue.add(REGISTRATION_MAIL_KEY, notification_payload(student, plan, end_date))
        except Exception:
            logger.warning(
                "Could not queue registration mail for student %s", student.id, exc_info=True
            )
