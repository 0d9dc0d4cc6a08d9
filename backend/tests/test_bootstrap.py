from __future__ import annotations

import pytest
from sqlalchemy import inspect, text
from sqlalchemy.orm import Session

from core.bootstrap import bootstrap_schema
from core.database import get_engine
from schemas.room import RoomOut
from services.allocation import allocate_room
from services.room_store import create_room, get_room, list_rooms


# Layout deployed by the Express service (SERIAL spelled the SQLite way).
CURRENT_LAYOUT = """
CREATE TABLE IF NOT EXISTS rooms (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  room_no TEXT UNIQUE NOT NULL,
  capacity INTEGER NOT NULL CHECK (capacity > 0),
  has_ac BOOLEAN NOT NULL,
  has_attached_washroom BOOLEAN NOT NULL,
  remaining_capacity INTEGER NOT NULL DEFAULT 0,
  is_occupied BOOLEAN NOT NULL DEFAULT FALSE
)
"""

# Same service before seat tracking existed.
EARLIEST_LAYOUT = """
CREATE TABLE IF NOT EXISTS rooms (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  room_no TEXT UNIQUE NOT NULL,
  capacity INTEGER NOT NULL CHECK (capacity > 0),
  has_ac BOOLEAN NOT NULL,
  has_attached_washroom BOOLEAN NOT NULL
)
"""


def _legacy_engine(path, ddl: str, rows: str):
    engine = get_engine(f"sqlite:///{path}")
    with engine.begin() as conn:
        conn.execute(text(ddl))
        conn.execute(text(rows))
    return engine


@pytest.fixture
def earliest_engine(tmp_path):
    engine = _legacy_engine(
        tmp_path / "earliest.db",
        EARLIEST_LAYOUT,
        "INSERT INTO rooms (room_no, capacity, has_ac, has_attached_washroom) "
        "VALUES ('101', 4, 1, 0), ('102', 2, 0, 1)",
    )
    yield engine
    engine.dispose()


@pytest.fixture
def current_engine(tmp_path):
    engine = _legacy_engine(
        tmp_path / "current.db",
        CURRENT_LAYOUT,
        "INSERT INTO rooms (room_no, capacity, has_ac, has_attached_washroom, remaining_capacity, is_occupied) "
        "VALUES ('101', 4, 1, 0, 1, 0), ('102', 2, 0, 1, 0, 1)",
    )
    yield engine
    engine.dispose()


def _rows(engine):
    with engine.connect() as conn:
        return conn.execute(
            text("SELECT room_no, remaining_capacity, is_occupied FROM rooms ORDER BY room_no")
        ).all()


def test_creates_rooms_table_on_empty_database(tmp_path):
    engine = get_engine(f"sqlite:///{tmp_path / 'empty.db'}")
    try:
        bootstrap_schema(engine)
        columns = {c["name"] for c in inspect(engine).get_columns("rooms")}
        assert {"id", "room_no", "capacity", "remaining_capacity", "is_occupied", "created_at"} <= columns
    finally:
        engine.dispose()


def test_earliest_table_is_upgraded_and_backfilled(earliest_engine):
    bootstrap_schema(earliest_engine)

    columns = {c["name"] for c in inspect(earliest_engine).get_columns("rooms")}
    assert {"remaining_capacity", "is_occupied", "created_at"} <= columns
    rows = _rows(earliest_engine)
    assert [(r[0], r[1], bool(r[2])) for r in rows] == [("101", 4, False), ("102", 2, False)]


def test_rerun_does_not_refill_full_rooms(earliest_engine):
    bootstrap_schema(earliest_engine)
    with earliest_engine.begin() as conn:
        conn.execute(text("UPDATE rooms SET remaining_capacity = 0, is_occupied = 1 WHERE room_no = '102'"))

    bootstrap_schema(earliest_engine)

    rows = {r[0]: (r[1], bool(r[2])) for r in _rows(earliest_engine)}
    assert rows["102"] == (0, True)
    assert rows["101"] == (4, False)


def test_current_table_keeps_seat_counts(current_engine):
    bootstrap_schema(current_engine)

    rows = {r[0]: (r[1], bool(r[2])) for r in _rows(current_engine)}
    assert rows == {"101": (1, False), "102": (0, True)}


@pytest.mark.parametrize("engine_fixture", ["earliest_engine", "current_engine"])
def test_store_and_engine_work_after_upgrade(request, engine_fixture):
    engine = request.getfixturevalue(engine_fixture)
    bootstrap_schema(engine)

    with Session(engine) as db:
        rooms = list_rooms(db)
        assert [r.room_no for r in rooms] == ["101", "102"]
        # Rows from the old table serialize like new ones.
        assert all(RoomOut.model_validate(r).created_at is not None for r in rooms)

        result = allocate_room(db, students=1, needs_ac=True)
        assert result.allocated is True
        assert result.room_no == "101"

        added = create_room(db, room_no="103", capacity=3, has_ac=False, has_attached_washroom=False)
        assert isinstance(added.id, int)
        assert added.created_at is not None
        assert get_room(db, "103").remaining_capacity == 3
