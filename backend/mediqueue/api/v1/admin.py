"""Admin-only management of doctors."""

from __future__ import annotations

from flask import Blueprint, request

from mediqueue.api.deps import json_response, require_role, timing
from mediqueue.models.user import Role
from mediqueue.schemas import DoctorCreateSchema, DoctorSchema
from mediqueue.services.doctors import DoctorCreateIn, DoctorService

bp = Blueprint("admin", __name__)

doctor_schema = DoctorSchema()
doctors_schema = DoctorSchema(many=True)
doctor_create_schema = DoctorCreateSchema()


@bp.get("/doctors")
@require_role(Role.ADMIN)
@timing
def list_doctors():
    """List every doctor, deactivated ones included, ordered by name."""

    return json_response({"data": doctors_schema.dump(DoctorService().list_all())})


@bp.post("/doctors")
@require_role(Role.ADMIN)
@timing
def create_doctor():
    """Create a doctor identity and its profile."""

    data = doctor_create_schema.load(request.get_json(silent=True) or {})
    doctor = DoctorService().create(DoctorCreateIn(**data))
    return json_response(doctor_schema.dump(doctor), status=201)


@bp.patch("/doctors/<int:doctor_id>/availability")
@require_role(Role.ADMIN)
@timing
def toggle_availability(doctor_id: int):
    """Flip whether the doctor accepts new bookings."""

    doctor = DoctorService().toggle_availability(doctor_id)
    return json_response(doctor_schema.dump(doctor))
