"""Custom exceptions for State Store."""


class StateStoreError(Exception):
    """Base exception for State Store errors."""


class RecordExistsError(StateStoreError):
    """A record with the same unique value already exists."""


class RecordNotFoundError(StateStoreError):
    """Record with given ID does not exist."""
