"""Profile endpoints for any authenticated identity."""

from __future__ import annotations

from flask import Blueprint, request

from mediqueue.api.deps import current_principal, json_response, require_auth, timing
from mediqueue.schemas import IdentitySchema, ProfileUpdateSchema
from mediqueue.services.identity import IdentityService, ProfileUpdateIn

bp = Blueprint("users", __name__)

identity_schema = IdentitySchema()
profile_update_schema = ProfileUpdateSchema()


@bp.get("/me")
@require_auth
@timing
def me():
    """Return the authenticated identity's profile."""

    identity = IdentityService().get(current_principal().id)
    return json_response(identity_schema.dump(identity))


@bp.patch("/me")
@require_auth
@timing
def update_me():
    """Partially update the caller's name and phone."""

    data = profile_update_schema.load(request.get_json(silent=True) or {})
    identity = IdentityService().update_profile(current_principal().id, ProfileUpdateIn(**data))
    return json_response(identity_schema.dump(identity))
