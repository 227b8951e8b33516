"""State Store - Persistent storage for users, students, plans and registrations."""

from gymreg.state_store.exceptions import (
    RecordExistsError,
    RecordNotFoundError,
    StateStoreError,
)
from gymreg.state_store.models import (
    Plan,
    Registration,
    Student,
    User,
    utcnow,
)
from gymreg.state_store.store import StateStore

__all__ = [
    "Plan",
    "RecordExistsError",
    "RecordNotFoundError",
    "Registration",
    "StateStore",
    "StateStoreError",
    "Student",
    "User",
    "utcnow",
]
