"""Public doctor directory."""

from __future__ import annotations

from flask import Blueprint, request

from mediqueue.api.deps import json_response, timing
from mediqueue.schemas import DoctorFilterSchema, DoctorPublicSchema
from mediqueue.services.doctors import DoctorService

bp = Blueprint("doctors", __name__)

doctors_schema = DoctorPublicSchema(many=True)
doctor_filter_schema = DoctorFilterSchema()


@bp.get("")
@timing
def list_doctors():
    """List active doctors by name; no authentication required."""

    filters = doctor_filter_schema.load(request.args)
    doctors = DoctorService().list_public(speciality=filters["speciality"])
    return json_response({"data": doctors_schema.dump(doctors)})
