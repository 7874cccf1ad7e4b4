"""Pytest fixtures building an isolated application per test.

Every test gets a fresh Flask app bound to its own in-memory SQLite
database; the schema is created on entry and dropped on exit so data never
leaks between cases. Tests that need different settings override the
``config_overrides`` fixture in their module.
"""

from __future__ import annotations

import os
from typing import Any

import pytest

from mediqueue.core.config import TestingConfig
from mediqueue.core.extensions import db as _db
from mediqueue.factory import create_app


@pytest.fixture()
def config_overrides() -> dict[str, Any]:
    """Extra config keys layered over :class:`TestingConfig`."""
    return {}


@pytest.fixture()
def app(config_overrides):
    """Create a Flask application configured for testing.

    Yields
    ------
    flask.Flask
        Application with its app context pushed and the schema created.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    config = type("TestConfig", (TestingConfig,), dict(config_overrides))
    app = create_app(config, instance_relative_config=False)
    app.logger.setLevel("WARNING")
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def db(app):
    """Database extension bound to the testing application."""
    return _db


@pytest.fixture()
def session(db):
    """Flask-scoped SQLAlchemy session shared with the code under test."""
    return db.session


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to the test session -----------------------------------
@pytest.fixture(autouse=True)
def _factories_session(request):
    """Wire Factory Boy's session helper when the test uses the database."""
    from tests.factories import SQLAlchemySession

    if "app" in request.fixturenames:
        SQLAlchemySession.set(request.getfixturevalue("session"))
    else:
        SQLAlchemySession.set(None)
    yield
