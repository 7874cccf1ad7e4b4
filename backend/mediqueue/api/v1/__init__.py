"""API v1 blueprint package bundling versioned routes."""

from __future__ import annotations

from flask import Blueprint

API_VERSION = "v1"

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .admin import bp as admin_bp  # noqa: E402
from .appointments import bp as appointments_bp  # noqa: E402
from .auth import bp as auth_bp  # noqa: E402
from .doctor import bp as doctor_bp  # noqa: E402
from .doctors import bp as doctors_bp  # noqa: E402
from .health import bp as health_bp  # noqa: E402
from .users import bp as users_bp  # noqa: E402

# Each tuple: (blueprint, url_prefix_relative_to_version)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> /api/v1/health
    (auth_bp, "/auth"),
    (users_bp, "/users"),
    (doctors_bp, "/doctors"),
    (appointments_bp, "/appointments"),
    (doctor_bp, "/doctor"),
    (admin_bp, "/admin"),
]
