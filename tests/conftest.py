from __future__ import annotations

import os

# The module-level app refuses to start without a secret.
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient

from shareregistry.db.seed import seed_reference_data
from shareregistry.main import create_app
from tests.common import make_settings


@pytest.fixture()
def app(tmp_path):
    return create_app(make_settings(tmp_path))


@pytest.fixture()
def bare_client(app):
    """Client over an empty schema (no roles, no company types)."""
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def client(bare_client, app):
    with app.state.session_factory() as db:
        seed_reference_data(db)
    return bare_client


@pytest.fixture()
def db(client, app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()
