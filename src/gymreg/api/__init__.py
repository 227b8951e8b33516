"""REST API for gymreg."""

from gymreg.api.app import app, create_app
from gymreg.api.models import (
    APIResponse,
    RegistrationListItem,
    RegistrationResponse,
)

__all__ = [
    "APIResponse",
    "RegistrationListItem",
    "RegistrationResponse",
    "app",
    "create_app",
]
