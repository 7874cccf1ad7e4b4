"""Doctor Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from mediqueue.models.doctor import DEFAULT_SPECIALITY


class DoctorCreateSchema(Schema):
    """Admin payload to create a doctor identity with its profile."""

    name = fields.String(required=True, validate=validate.Length(min=2, max=100))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=8, max=128))
    speciality = fields.String(
        load_default=DEFAULT_SPECIALITY, validate=validate.Length(min=2, max=100)
    )
    fee = fields.Integer(load_default=0, strict=True, validate=validate.Range(min=0))


class DoctorPublicSchema(Schema):
    """Entry of the public doctor list: no contact details."""

    id = fields.Integer(required=True)
    name = fields.String(required=True)
    speciality = fields.String(required=True)
    fee = fields.Integer(required=True)
    available = fields.Boolean(required=True)


class DoctorSchema(DoctorPublicSchema):
    """Admin view of a doctor."""

    email = fields.Email(required=True)
    role = fields.String(required=True)
    is_active = fields.Boolean(data_key="isActive", required=True)


class DoctorFilterSchema(Schema):
    """Query parameters of the public doctor list."""

    class Meta:
        unknown = EXCLUDE

    speciality = fields.String(load_default=None)
