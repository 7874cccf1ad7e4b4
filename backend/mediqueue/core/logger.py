"""JSON logging with per-request correlation ids.

Every line written by the root logger is one JSON object. Auth and booking
events pass their structured context through ``extra=`` (``identity_id``,
``role``, ``reason``...); those keys are lifted to top-level fields.
Credential-bearing keys are masked before rendering, whatever logger they
come from.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, Response, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

EXTRA_KEYS = (
    "endpoint",
    "elapsed_ms",
    "identity_id",
    "role",
    "reason",
    "rotated",
    "fields",
    "doctor_id",
    "appointment_id",
    "available",
)
SENSITIVE_KEYS = frozenset(
    {"password", "access_token", "refresh_token", "authorization", "token"}
)
REDACTED = "***"


def ensure_request_id() -> str:
    """Return the request's correlation id, adopting or minting it on first use.

    Outside a request context a throwaway UUID4 is returned.
    """
    if not has_request_context():
        return str(uuid4())
    cached = g.get("request_id")
    if cached:
        return str(cached)
    incoming = next(
        (request.headers[h] for h in CORRELATION_HEADERS if request.headers.get(h)),
        None,
    )
    g.request_id = incoming or str(uuid4())
    return str(g.request_id)


class RequestIdFilter(logging.Filter):
    """Stamp ``record.request_id`` (``None`` outside requests)."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = ensure_request_id() if has_request_context() else None
        return True


class RedactingFilter(logging.Filter):
    """Mask ``extra=`` attributes whose name looks like a credential."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key in SENSITIVE_KEYS:
            if getattr(record, key, None) is not None:
                setattr(record, key, REDACTED)
        return True


class JSONFormatter(logging.Formatter):
    """Serialize a record to a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update(
            (key, getattr(record, key))
            for key in (*EXTRA_KEYS, *sorted(SENSITIVE_KEYS))
            if hasattr(record, key)
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | int = "INFO") -> None:
    """Route the root logger to stdout as JSON, replacing existing handlers."""
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())
    handler.addFilter(RedactingFilter())
    handler.setFormatter(JSONFormatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(_resolve_level(level))


def init_app(app: Flask) -> None:
    """Resolve the request id before each request and echo it on the response."""
    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _bind_request_id() -> None:
        ensure_request_id()

    @app.after_request
    def _echo_request_id(response: Response) -> Response:
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        return response


__all__ = [
    "REQUEST_ID_HEADER",
    "EXTRA_KEYS",
    "JSONFormatter",
    "RedactingFilter",
    "configure_logging",
    "ensure_request_id",
    "init_app",
]
