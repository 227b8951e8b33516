"""Pydantic models for REST API."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, PlainSerializer

T = TypeVar("T")

# Prices stay Decimal in Python and render as JSON numbers
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Nested models


class StudentSummary(BaseModel):
    """Student fields embedded in a registration."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class PlanSummary(BaseModel):
    """Plan fields embedded in a registration listing."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str


class PlanDetail(PlanSummary):
    """Plan fields embedded in a single registration."""

    price: Money
    duration: int


# Registration models


class RegistrationRequest(BaseModel):
    """Documented request body for creating or updating a registration.

    Used for the OpenAPI schema only; the body is validated by the
    registration service so malformed input maps to a 400.
    """

    student_id: int
    plan_id: int
    start_date: datetime


class RegistrationResponse(BaseModel):
    """Response model for a single registration."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    student_id: int
    plan_id: int
    start_date: datetime
    end_date: datetime
    price: Money
    active: bool
    student: StudentSummary
    plan: PlanDetail


def registration_to_response(registration: Any) -> RegistrationResponse:
    """Convert a Registration model to RegistrationResponse."""
    return RegistrationResponse.model_validate(registration)


class RegistrationListItem(BaseModel):
    """Response model for a registration in a listing."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    start_date: datetime
    end_date: datetime
    price: Money
    active: bool
    student: StudentSummary
    plan: PlanSummary


def registration_to_list_item(registration: Any) -> RegistrationListItem:
    """Convert a Registration model to RegistrationListItem."""
    return RegistrationListItem.model_validate(registration)
