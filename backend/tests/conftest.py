from __future__ import annotations

import os
import tempfile
from pathlib import Path

# Settings and the engine are built at import time, so point them at a scratch
# SQLite file before anything from the app is imported.
_TMP_DIR = Path(tempfile.mkdtemp(prefix="room-allocation-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'rooms.db'}"
os.environ["ENVIRONMENT"] = "development"
os.environ["AUTO_CREATE_SCHEMA"] = "true"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from core.bootstrap import bootstrap_schema  # noqa: E402
from core.database import ENGINE, SessionLocal  # noqa: E402
from models.base import Base  # noqa: E402
from services.room_store import create_room  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_schema():
    Base.metadata.drop_all(ENGINE)
    bootstrap_schema(ENGINE)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_room(db):
    def _make(room_no: str, capacity: int, *, has_ac: bool = False, has_washroom: bool = False):
        return create_room(
            db,
            room_no=room_no,
            capacity=capacity,
            has_ac=has_ac,
            has_attached_washroom=has_washroom,
        )

    return _make


@pytest.fixture
def client():
    from main import app

    with TestClient(app) as c:
        yield c
