"""Shared fixtures: a throwaway SQLite database and an API client."""

import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="signage-lite-tests-")
os.environ["SIGNAGE_DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["SIGNAGE_STATIC_DIR"] = ""

import pytest
from fastapi.testclient import TestClient

from helpers import create_tenant, pair_device
from signage_lite.db import Base, SessionLocal, engine
from signage_lite.main import app


@pytest.fixture(autouse=True)
def fresh_schema():
    """Recreate every table so each test starts from an empty datastore."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def tenant_id(client) -> int:
    return create_tenant(client)


@pytest.fixture
def paired(client, tenant_id) -> dict:
    return pair_device(client, tenant_id)
