"""Appointment Marshmallow schemas.

Bookings name a slot the way the web client does: a calendar day
(``slotDate``, ``YYYY-MM-DD``) plus a time of day (``slotTime``) in either
24-hour (``"14:30"``) or 12-hour (``"2:30 PM"``) form. Both are read as UTC.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime, time

from marshmallow import EXCLUDE, Schema, fields, post_load

_AMPM = re.compile(r"^(\d{1,2}):(\d{2})\s*([AaPp][Mm])$")
_H24 = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_slot_time(raw: str) -> time:
    """Parse ``"14:30"`` or ``"2:30 PM"`` into a :class:`datetime.time`.

    :raises ValueError: On anything else, or an out-of-range hour or minute.
    """
    value = raw.strip()
    match = _AMPM.match(value)
    if match:
        hour, minute, meridiem = int(match[1]), int(match[2]), match[3].upper()
        if not 1 <= hour <= 12:
            raise ValueError("Hour must be 1-12 with AM/PM")
        hour = hour % 12 + (12 if meridiem == "PM" else 0)
    else:
        match = _H24.match(value)
        if not match:
            raise ValueError("Use HH:MM or H:MM AM/PM")
        hour, minute = int(match[1]), int(match[2])
    return time(hour, minute)


class SlotTime(fields.Field):
    """Time of day accepting 24-hour or 12-hour notation."""

    default_error_messages = {"invalid": "Not a valid slot time: {reason}."}

    def _deserialize(self, value, attr, data, **kwargs):
        if not isinstance(value, str):
            raise self.make_error("invalid", reason="expected a string")
        try:
            return parse_slot_time(value)
        except ValueError as exc:
            raise self.make_error("invalid", reason=str(exc)) from exc


class AppointmentCreateSchema(Schema):
    """Patient payload to book a slot; loads to ``doctor_id`` and ``starts_at``."""

    class Meta:
        unknown = EXCLUDE

    doctor_id = fields.Integer(data_key="doctorId", required=True, strict=True)
    slot_date = fields.Date(data_key="slotDate", required=True)
    slot_time = SlotTime(data_key="slotTime", required=True)

    @post_load
    def _combine(self, data, **kwargs):
        starts_at = datetime.combine(data["slot_date"], data["slot_time"], tzinfo=UTC)
        return {"doctor_id": data["doctor_id"], "starts_at": starts_at}


class AppointmentSchema(Schema):
    """Appointment as seen by its patient or its doctor."""

    id = fields.Integer(required=True)
    patient_id = fields.Integer(data_key="patientId", required=True)
    patient_name = fields.String(data_key="patientName", required=True)
    doctor_id = fields.Integer(data_key="doctorId", required=True)
    doctor_name = fields.String(data_key="doctorName", required=True)
    starts_at = fields.AwareDateTime(data_key="startsAt", required=True)
    amount = fields.Integer(required=True)
    cancelled = fields.Boolean(required=True)
    created_at = fields.AwareDateTime(data_key="createdAt", required=True)


class AppointmentListFilterSchema(Schema):
    """Query parameters of the doctor schedule."""

    class Meta:
        unknown = EXCLUDE

    include_cancelled = fields.Boolean(data_key="includeCancelled", load_default=False)
