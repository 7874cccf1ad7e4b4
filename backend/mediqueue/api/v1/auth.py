"""Session lifecycle endpoints: register, login, refresh, logout."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from mediqueue.api.deps import (
    build_auth_service,
    current_principal,
    json_response,
    require_auth,
    timing,
)
from mediqueue.core.extensions import limiter
from mediqueue.schemas import (
    LoginSchema,
    RefreshResponseSchema,
    RefreshSchema,
    RegisterSchema,
    TokenPairSchema,
)
from mediqueue.services.auth import LoginIn, LogoutIn, RefreshIn
from mediqueue.services.registration import PatientRegistrationIn, RegistrationService

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshSchema()
token_pair_schema = TokenPairSchema()
refresh_response_schema = RefreshResponseSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


@bp.post("/register")
@timing
def register():
    """Register a patient and return a token pair."""

    data = register_schema.load(request.get_json(silent=True) or {})
    service = RegistrationService(auth=build_auth_service())
    out = service.register_patient(PatientRegistrationIn(**data))
    return json_response(token_pair_schema.dump(out.tokens), status=201)


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Authenticate credentials and issue a token pair."""

    data = login_schema.load(request.get_json(silent=True) or {})
    pair = build_auth_service().login(LoginIn(email=data["email"], password=data["password"]))
    return json_response(token_pair_schema.dump(pair))


@bp.post("/refresh")
@timing
def refresh():
    """Exchange a live refresh token for a new access token."""

    payload = request.get_json(silent=True)
    data = refresh_schema.load(payload if isinstance(payload, dict) else {})
    out = build_auth_service().refresh(RefreshIn(refresh_token=data["refresh_token"]))
    body = {"access_token": out.access_token}
    if out.refresh_token is not None:
        body["refresh_token"] = out.refresh_token
    return json_response(refresh_response_schema.dump(body))


@bp.post("/logout")
@require_auth
@timing
def logout():
    """Clear the caller's refresh session."""

    build_auth_service().logout(LogoutIn(identity_id=current_principal().id))
    return json_response({"message": "Logged out"})
