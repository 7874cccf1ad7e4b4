"""Authentication-related Marshmallow schemas.

Token payloads use the camelCase keys the web clients already store
(``accessToken`` / ``refreshToken``).
"""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class RegisterSchema(Schema):
    """Input payload for patient self-registration."""

    name = fields.String(required=True, validate=validate.Length(min=2, max=100))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=8, max=128))


class LoginSchema(Schema):
    """Input payload for authenticating an identity."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class RefreshSchema(Schema):
    """Input payload for a refresh exchange.

    Nothing here is a validation error: a missing or non-string token is
    rejected by the exchange itself with 401.
    """

    class Meta:
        unknown = EXCLUDE

    refresh_token = fields.Raw(data_key="refreshToken", load_default=None, allow_none=True)


class TokenPairSchema(Schema):
    """Response payload with both tokens."""

    access_token = fields.String(data_key="accessToken", required=True)
    refresh_token = fields.String(data_key="refreshToken", required=True)


class RefreshResponseSchema(Schema):
    """Response payload of a refresh exchange; ``refreshToken`` only when rotating."""

    access_token = fields.String(data_key="accessToken", required=True)
    refresh_token = fields.String(data_key="refreshToken")
