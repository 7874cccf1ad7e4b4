"""Reverse-proxy header handling."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Trust ``X-Forwarded-*`` headers from ``PROXYFIX_HOPS`` upstream proxies.

    The login rate limit keys on the client address, so behind a proxy the
    forwarded address must be honoured. Disabled with ``USE_PROXYFIX=False``.
    """
    if not app.config.get("USE_PROXYFIX", True):
        return
    hops = int(app.config.get("PROXYFIX_HOPS", 1))
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops, x_prefix=hops)
