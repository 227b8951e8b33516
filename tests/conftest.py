"""Shared pytest fixtures and configuration."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from gymreg.state_store import Plan, StateStore, Student, User


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures

# Fixed "now" for tests that need a deterministic clock
FIXED_NOW = datetime(2024, 1, 9, 12, 0, 0)


@pytest.fixture
def now() -> datetime:
    """The fixed current time used by clock-driven tests."""
    return FIXED_NOW


@pytest.fixture
def store():
    """Create an in-memory StateStore."""
    s = StateStore(":memory:")
    yield s
    s.close()


@pytest.fixture
def admin(store: StateStore) -> User:
    """An administrator record."""
    return store.create_user(name="Admin", email="admin@gym.com")


@pytest.fixture
def student(store: StateStore) -> Student:
    """A student record."""
    return store.create_student(name="Ana Souza", email="ana@example.com", age=28)


@pytest.fixture
def plan(store: StateStore) -> Plan:
    """A three month plan at 100 per month."""
    return store.create_plan(title="Silver", price=Decimal("100.00"), duration=3)


@pytest.fixture
def job_queue() -> MagicMock:
    """Create a mock JobQueue."""
    return MagicMock()
