"""Exceptions for the registrations module.

Every error carries a fixed, human-readable message that is safe to show to
the caller.
"""


class RegistrationError(Exception):
    """Base exception for registration rule failures."""

    message = "registration request rejected"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class Unauthorized(RegistrationError):
    """Caller is not a known administrator."""

    message = "only administrators may enroll students"


class InvalidInput(RegistrationError):
    """Required fields missing or of the wrong type."""

    message = "validation failed, check all fields"


class NotFoundError(RegistrationError):
    """A referenced record does not exist."""

    message = "record does not exist"


class StudentNotFound(NotFoundError):
    """Student with given ID does not exist."""

    message = "this student does not exist"


class PlanNotFound(NotFoundError):
    """Plan with given ID does not exist."""

    message = "this plan does not exist"


class RegistrationNotFound(NotFoundError):
    """Registration with given ID does not exist."""

    message = "this registration does not exist"


class PastDateRejected(RegistrationError):
    """Start date lies further in the past than the allowed tolerance."""

    message = "past dates are not allowed"


class DuplicateActiveRegistration(RegistrationError):
    """Student already has a registration record."""

    message = "this student already has an active registration"
