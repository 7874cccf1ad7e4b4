"""Extension singletons, bound to an application by :func:`init_app`."""

from __future__ import annotations

import redis  # type: ignore[import-untyped]
from flask import Flask
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

# Deterministic constraint names keep Alembic autogenerate diffs stable.
metadata = MetaData(
    naming_convention={
        "ix": "ix_%(table_name)s_%(column_0_name)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

db = SQLAlchemy(metadata=metadata, session_options={"autoflush": False})
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address)

REDIS_EXTENSION_KEY = "redis_client"


def _connect_redis(app: Flask) -> None:
    """Attach a Redis client under ``app.extensions`` when ``REDIS_URL`` is set.

    :raises RuntimeError: If the configured server does not answer ``PING``.
    """
    url = app.config.get("REDIS_URL")
    if not url:
        app.extensions.pop(REDIS_EXTENSION_KEY, None)
        return
    client = redis.Redis.from_url(url)
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Redis is unreachable at {url!r}") from exc
    app.extensions[REDIS_EXTENSION_KEY] = client


def init_app(app: Flask) -> None:
    """Bind database, migrations, JWT, rate limiting and the optional Redis client."""
    db.init_app(app)

    # Alembic needs the mapped tables registered on ``metadata``.
    from mediqueue import models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)
    _connect_redis(app)
