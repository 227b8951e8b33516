"""Notifications - Asynchronous job submission for registration mails."""

from gymreg.notifications.jobs import REGISTRATION_MAIL_KEY, registration_mail
from gymreg.notifications.queue import JobQueue, RQJobQueue

__all__ = [
    "REGISTRATION_MAIL_KEY",
    "JobQueue",
    "RQJobQueue",
    "registration_mail",
]
