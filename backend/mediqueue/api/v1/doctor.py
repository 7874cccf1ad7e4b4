"""Doctor-only endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from mediqueue.api.deps import current_principal, json_response, require_role, timing
from mediqueue.models.user import Role
from mediqueue.schemas import AppointmentListFilterSchema, AppointmentSchema, IdentitySchema
from mediqueue.services.appointments import AppointmentService
from mediqueue.services.identity import IdentityService

bp = Blueprint("doctor", __name__)

identity_schema = IdentitySchema()
appointments_schema = AppointmentSchema(many=True)
appointment_filter_schema = AppointmentListFilterSchema()


@bp.get("/profile")
@require_role(Role.DOCTOR)
@timing
def profile():
    identity = IdentityService().get(current_principal().id)
    return json_response(identity_schema.dump(identity))


@bp.get("/appointments")
@require_role(Role.DOCTOR)
@timing
def schedule():
    """The caller's appointments by slot time; cancelled ones on request."""

    filters = appointment_filter_schema.load(request.args)
    items = AppointmentService().list_for_doctor(
        current_principal().id, include_cancelled=filters["include_cancelled"]
    )
    return json_response({"data": appointments_schema.dump(items)})
