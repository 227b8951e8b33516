"""Registration endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Query, status

from gymreg.api.dependencies import CallerIdDep, RegistrationServiceDep
from gymreg.api.models import (
    APIResponse,
    RegistrationListItem,
    RegistrationRequest,
    RegistrationResponse,
    registration_to_list_item,
    registration_to_response,
)

router = APIRouter(prefix="/registrations", tags=["registrations"])

_BODY_SCHEMA = {
    "requestBody": {
        "content": {"application/json": {"schema": RegistrationRequest.model_json_schema()}}
    }
}


@router.get("", response_model=APIResponse[list[RegistrationListItem]])
def list_registrations(
    service: RegistrationServiceDep,
    caller_id: CallerIdDep,
    page: int = Query(default=1, ge=1, description="Page number, 10 per page"),
) -> APIResponse[list[RegistrationListItem]]:
    """List registrations, one page at a time."""
    registrations = service.index(caller_id, page=page)
    return APIResponse(data=[registration_to_list_item(r) for r in registrations])


@router.post(
    "",
    response_model=APIResponse[RegistrationResponse],
    status_code=status.HTTP_201_CREATED,
    openapi_extra=_BODY_SCHEMA,
)
def create_registration(
    service: RegistrationServiceDep,
    caller_id: CallerIdDep,
    payload: Any = Body(default=None),
) -> APIResponse[RegistrationResponse]:
    """Enroll a student in a plan."""
    created = service.store(caller_id, payload)
    return APIResponse(data=registration_to_response(created))


@router.get("/{registration_id}", response_model=APIResponse[RegistrationResponse])
def get_registration(
    registration_id: int, service: RegistrationServiceDep
) -> APIResponse[RegistrationResponse]:
    """Get a registration by ID. Data is null when it doesn't exist."""
    registration = service.show(registration_id)
    if registration is None:
        return APIResponse(data=None)
    return APIResponse(data=registration_to_response(registration))


@router.put(
    "/{registration_id}",
    response_model=APIResponse[RegistrationResponse],
    openapi_extra=_BODY_SCHEMA,
)
def update_registration(
    registration_id: int,
    service: RegistrationServiceDep,
    caller_id: CallerIdDep,
    payload: Any = Body(default=None),
) -> APIResponse[RegistrationResponse]:
    """Replace a registration's student, plan and start date."""
    updated = service.update(caller_id, registration_id, payload)
    return APIResponse(data=registration_to_response(updated))


@router.delete("/{registration_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_registration(
    registration_id: int, service: RegistrationServiceDep, caller_id: CallerIdDep
) -> None:
    """Delete a registration."""
    service.delete(caller_id, registration_id)
