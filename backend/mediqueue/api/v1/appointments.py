"""Patient booking endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from mediqueue.api.deps import current_principal, json_response, require_role, timing
from mediqueue.models.user import Role
from mediqueue.schemas import AppointmentCreateSchema, AppointmentSchema
from mediqueue.services.appointments import (
    AppointmentService,
    BookAppointmentIn,
    CancelAppointmentIn,
)

bp = Blueprint("appointments", __name__)

appointment_schema = AppointmentSchema()
appointments_schema = AppointmentSchema(many=True)
appointment_create_schema = AppointmentCreateSchema()


@bp.post("")
@require_role(Role.PATIENT)
@timing
def book():
    """Book a doctor slot for the caller."""

    data = appointment_create_schema.load(request.get_json(silent=True) or {})
    out = AppointmentService().book(
        BookAppointmentIn(patient_id=current_principal().id, **data)
    )
    return json_response(appointment_schema.dump(out), status=201)


@bp.get("")
@require_role(Role.PATIENT)
@timing
def list_mine():
    """The caller's appointments, newest booking first."""

    items = AppointmentService().list_for_patient(current_principal().id)
    return json_response({"data": appointments_schema.dump(items)})


@bp.post("/<int:appointment_id>/cancel")
@require_role(Role.PATIENT)
@timing
def cancel(appointment_id: int):
    """Cancel one of the caller's appointments and release its slot."""

    out = AppointmentService().cancel(
        CancelAppointmentIn(patient_id=current_principal().id, appointment_id=appointment_id)
    )
    return json_response(appointment_schema.dump(out))
