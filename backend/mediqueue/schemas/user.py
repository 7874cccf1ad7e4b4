"""Identity Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class IdentitySchema(Schema):
    """Public identity representation. Never carries secrets or session fields."""

    id = fields.Integer(required=True)
    name = fields.String(required=True)
    email = fields.Email(required=True)
    role = fields.String(required=True)
    phone = fields.String(allow_none=True)


class ProfileUpdateSchema(Schema):
    """Partial update of the caller's own profile; unknown keys are ignored.

    An empty update is rejected by the service (400), not here.
    """

    class Meta:
        unknown = EXCLUDE

    name = fields.String(validate=validate.Length(min=2, max=100))
    phone = fields.String(validate=validate.Length(max=20))
