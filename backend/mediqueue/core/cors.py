"""CORS policy for the patient and back-office web clients."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from mediqueue.core.logger import REQUEST_ID_HEADER

ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type", "Authorization", REQUEST_ID_HEADER]


def parse_origins(raw: str | None) -> list[str]:
    """Split a comma-separated origin list, dropping blanks and stray spaces."""
    return [o.strip() for o in (raw or "").split(",") if o.strip()]


def init_app(app: Flask) -> None:
    """Configure CORS for API endpoints based on application config.

    Parameters
    ----------
    app: flask.Flask
        Application whose ``CORS_ORIGINS`` and ``CORS_MAX_AGE`` settings are
        consulted.

    Notes
    -----
    Both web clients send the access token in the ``Authorization`` header,
    so that header must be allowed on preflight. When ``CORS_ORIGINS`` is
    blank or ``"*"`` any origin is accepted but credentials are not.
    """
    origins = parse_origins(app.config.get("CORS_ORIGINS"))
    wildcard = len(origins) == 0 or origins == ["*"]

    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if wildcard else origins}},
        methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
        expose_headers=[REQUEST_ID_HEADER],
        supports_credentials=not wildcard,
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
