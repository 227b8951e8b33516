"""Registrations - lifecycle and validation rules for gym enrollments."""

from gymreg.registrations.exceptions import (
    DuplicateActiveRegistration,
    InvalidInput,
    NotFoundError,
    PastDateRejected,
    PlanNotFound,
    RegistrationError,
    RegistrationNotFound,
    StudentNotFound,
    Unauthorized,
)
from gymreg.registrations.gate import AuthorizationGate
from gymreg.registrations.models import DerivedFields, RegistrationInput
from gymreg.registrations.scheduler import (
    RegistrationScheduler,
    add_months,
    compute_price,
    derive,
)
from gymreg.registrations.service import RegistrationService
from gymreg.registrations.validator import RegistrationValidator

__all__ = [
    "AuthorizationGate",
    "DerivedFields",
    "DuplicateActiveRegistration",
    "InvalidInput",
    "NotFoundError",
    "PastDateRejected",
    "PlanNotFound",
    "RegistrationError",
    "RegistrationInput",
    "RegistrationNotFound",
    "RegistrationScheduler",
    "RegistrationService",
    "RegistrationValidator",
    "StudentNotFound",
    "Unauthorized",
    "add_months",
    "compute_price",
    "derive",
]
