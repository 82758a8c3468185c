import time

import mongomock
import pytest

from app import create_app
from config import TestingConfig
from models.attendance import Attendance
from models.users import User
from utils import clock
from utils.db import ensure_indexes, mongo


@pytest.fixture
def app():
    app = create_app(TestingConfig)

    # swap the real client for an in-memory one
    mongo.cx = mongomock.MongoClient()
    mongo.db = mongo.cx["smartattend_test"]

    with app.app_context():
        ensure_indexes()
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def frozen_now(monkeypatch):
    """Pin clock.utcnow() to a fixed instant (UTC, naive)."""
    def freeze(value):
        monkeypatch.setattr(clock, "utcnow", lambda: value)
        return value
    return freeze


@pytest.fixture
def make_user(app):
    def _make(employee_id="EMP001", name="John Smith", email=None, face_data=None):
        user = User(name=name, employee_id=employee_id,
                    email=email or f"{employee_id.lower()}@company.com", face_data=face_data)
        return user.save()
    return _make


@pytest.fixture
def make_attendance(app):
    def _make(employee_id="EMP001", name="John Smith", timestamp=None, status="present", method="qr"):
        row = Attendance(employee_id=employee_id, name=name, method=method, status=status,
                         location="Office", ip_address="127.0.0.1",
                         timestamp=timestamp or clock.utcnow())
        return row.save()
    return _make


@pytest.fixture
def system_tz(monkeypatch):
    """Switch the process timezone (POSIX TZ) for the duration of a test."""
    def switch(name):
        monkeypatch.setenv("TZ", name)
        time.tzset()
    yield switch
    monkeypatch.undo()
    time.tzset()
