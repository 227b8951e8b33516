"""Job callables executed by the rq worker."""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

# Dotted path rq uses to import the job inside the worker
REGISTRATION_MAIL_KEY = "gymreg.notifications.jobs.registration_mail"


def compose_registration_mail(payload: dict[str, Any]) -> dict[str, str]:
    """Build the confirmation mail for a new registration.

    Args:
        payload: Job payload with "student", "plan" and "end_date" keys.

    Returns:
        Dict with "to", "subject" and "body".
    """
    student = payload["student"]
    plan = payload["plan"]
    body = (
        f"Hello {student['name']},\n\n"
        f"Your registration in the {plan['title']} plan is confirmed.\n"
        f"Duration: {plan['duration']} month(s)\n"
        f"Monthly price: {plan['price']}\n"
        f"Valid until: {payload['end_date']}\n"
    )
    return {
        "to": f"{student['name']} <{student['email']}>",
        "subject": "Registration confirmed",
        "body": body,
    }


def registration_mail(payload: dict[str, Any]) -> dict[str, str]:
    """Worker entry point for the registration confirmation mail.

    Delivery belongs to the mail transport configured on the worker host;
    this job composes the message and hands it to the log.
    """
    message = compose_registration_mail(payload)
    logger.info("Registration mail for %s: %s", message["to"], message["subject"])
    return message
