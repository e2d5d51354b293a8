import os
import tempfile
from datetime import date

# must be set before the app modules read their configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["LOG_FILE"] = os.path.join(tempfile.gettempdir(), "e2d-ledger-tests.log")
os.environ.pop("ADMIN_EMAIL", None)
os.environ.pop("ADMIN_PASSWORD", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.auth import InMemoryAuthProvider, get_auth_provider
from app.core.clock import get_today
from app.initial_data import init_seed
from app.utils.database import Base, get_db
from main import app as fastapi_app

STAFF_EMAIL = "tresorier@e2d.test"
STAFF_PASSWORD = "s3cret"


class Clock:
    def __init__(self, today: date):
        self.today = today


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(eng, "connect")
    def _fk_on(dbapi_connection, connection_record):
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    init_seed(session)
    yield session
    session.close()


@pytest.fixture
def clock():
    return Clock(date(2025, 3, 15))


@pytest.fixture
def auth_provider():
    return InMemoryAuthProvider({STAFF_EMAIL: STAFF_PASSWORD})


@pytest.fixture
def client(db, session_factory, clock, auth_provider):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_today] = lambda: clock.today
    fastapi_app.dependency_overrides[get_auth_provider] = lambda: auth_provider

    with TestClient(fastapi_app) as c:
        yield c

    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    r = client.post("/auth/login", json={"email": STAFF_EMAIL, "password": STAFF_PASSWORD})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture
def make_member(client):
    counter = {"n": 0}

    def _make(monthly_due_amount=10000, **overrides):
        counter["n"] += 1
        payload = {
            "email": f"membre{counter['n']}@e2d.test",
            "last_name": f"Nom{counter['n']}",
            "first_name": "Paul",
            "phone": "699000000",
            "monthly_due_amount": monthly_due_amount,
        }
        payload.update(overrides)
        r = client.post("/members/", json=payload)
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture
def sanction_type_id(client):
    def _find(name, category):
        rows = client.get("/sanctions/types", params={"category": category}).json()
        return next(t["sanction_type_id"] for t in rows if t["name"] == name)

    return _find


@pytest.fixture
def aid_type_id(client):
    def _find(name):
        rows = client.get("/aids/types").json()
        return next(t["aid_type_id"] for t in rows if t["name"] == name)

    return _find
