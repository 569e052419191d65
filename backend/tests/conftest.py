"""
Every test gets its own SQLite file, so the suite runs without a PostgreSQL
server and tests never see each other's rows.
"""
import uuid

import pytest
from fastapi.testclient import TestClient

from liftoff.db import Database
from liftoff.main import create_app
from liftoff.repositories.user_repo import UserRepository
from liftoff.settings import Settings

PWD = "StrongPassw0rd!"


def uniq_email(prefix="u"):
    return f"{prefix}-{uuid.uuid4().hex[:8]}@ex.com"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        DB_BACKEND="sqlite",
        SQLITE_PATH=str(tmp_path / "liftoff-test.db"),
        API_VERSION="test",
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def make_headers(client):
    """Register a fresh user and return bearer headers for it."""
    def _make(email=None):
        email = email or uniq_email()
        r = client.post("/auth/register", json={"email": email, "password": PWD})
        assert r.status_code == 201, r.text
        r = client.post("/auth/login", json={"email": email, "password": PWD})
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['access_token']}"}
    return _make


# Store/engine level fixtures: real ORM sessions on the embedded backend

@pytest.fixture
def database(settings):
    database = Database.connect(settings)
    yield database
    database.close()


@pytest.fixture
def db(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def backend(database):
    return database.backend


@pytest.fixture
def make_user(db, backend):
    def _make():
        # password hashing is irrelevant below the HTTP layer
        return UserRepository(db, backend).create(email=uniq_email(), password_hash="x").id
    return _make


@pytest.fixture
def alice(make_user):
    return make_user()


@pytest.fixture
def bob(make_user):
    return make_user()
