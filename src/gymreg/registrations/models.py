"""Input model and data containers for the registrations module."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal  # noqa: TC003 - used at runtime by dataclass

from pydantic import BaseModel, ConfigDict, field_validator


def to_naive_utc(value: datetime) -> datetime:
    """Convert to the naive UTC form used for storage and comparisons."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


class RegistrationInput(BaseModel):
    """Fields a caller supplies to create or replace a registration.

    start_date accepts an ISO date (midnight) or date-time. Naive values are
    read as UTC.
    """

    model_config = ConfigDict(extra="ignore")

    student_id: int
    plan_id: int
    start_date: datetime

    @field_validator("start_date")
    @classmethod
    def _normalize_start_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


@dataclass(frozen=True)
class DerivedFields:
    """Values computed from a plan and a start date."""

    end_date: datetime
    price: Decimal
