from datetime import datetime

import pytest

from app import create_app
from models.attendance_model import AttendanceLedger
from models.presence_model import PresenceClient
from models.session_model import SessionManager
from utils.store import MemoryStore

NINE_AM = datetime(2024, 1, 1, 9, 0, 0)


class FixedClock:
    def __init__(self, moment=NINE_AM):
        self.moment = moment

    def __call__(self):
        return self.moment


class CodeSequence:
    def __init__(self, *codes):
        self.codes = list(codes)

    def __call__(self):
        return self.codes.pop(0)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def codes():
    return CodeSequence("XJ4K9P", "AB12CD", "QW7E8R", "ZZ0000")


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def corrupt_reports():
    return []


@pytest.fixture
def ledger(store, corrupt_reports):
    return AttendanceLedger(store, on_corrupt=lambda *args: corrupt_reports.append(args))


@pytest.fixture
def sessions(store, clock, codes, corrupt_reports):
    return SessionManager(store, clock=clock, code_factory=codes,
                          on_corrupt=lambda *args: corrupt_reports.append(args))


@pytest.fixture
def presence(sessions, ledger, clock):
    return PresenceClient(sessions, ledger, clock=clock)


@pytest.fixture(params=["memory", "sql"])
def app(request, clock, codes):
    config = {
        "TESTING": True,
        "STORE_BACKEND": request.param,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
    }
    return create_app(config, clock=clock, code_factory=codes)


def _login(app, name, role):
    client = app.test_client()
    resp = client.post("/login", json={"name": name, "role": role})
    assert resp.status_code == 200
    return client


@pytest.fixture
def lecturer(app):
    return _login(app, "Dr. Grey", "lecturer")


@pytest.fixture
def student(app):
    return _login(app, "Ann", "student")
