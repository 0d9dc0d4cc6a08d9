from __future__ import annotations

import logging

from sqlalchemy import inspect, text
from sqlalchemy.engine import Connection, Engine

from core.database import ENGINE
from models.base import Base
from models.room import Room


logger = logging.getLogger(__name__)


# Columns that older deployments of the rooms table were created without.
_LEGACY_COLUMNS: dict[str, str] = {
    "remaining_capacity": "INTEGER NOT NULL DEFAULT 0",
    "is_occupied": "BOOLEAN NOT NULL DEFAULT FALSE",
}


def _add_created_at(conn: Connection) -> None:
    # SQLite refuses ADD COLUMN with a non-constant default, so add it bare and backfill.
    column_type = Room.__table__.c.created_at.type.compile(dialect=conn.dialect)
    conn.execute(text(f"ALTER TABLE {Room.__tablename__} ADD COLUMN created_at {column_type}"))
    conn.execute(text("UPDATE rooms SET created_at = CURRENT_TIMESTAMP WHERE created_at IS NULL"))


def _ensure_rooms_schema(conn: Connection) -> None:
    # Keep this idempotent: safe across deploys.
    Base.metadata.create_all(conn, tables=[Room.__table__], checkfirst=True)

    existing = {c["name"] for c in inspect(conn).get_columns(Room.__tablename__)}
    added: list[str] = []
    for name, ddl in _LEGACY_COLUMNS.items():
        if name in existing:
            continue
        conn.execute(text(f"ALTER TABLE {Room.__tablename__} ADD COLUMN {name} {ddl}"))
        added.append(name)

    if "created_at" not in existing:
        _add_created_at(conn)
        added.append("created_at")

    if not added:
        return

    # Only backfill rows that predate the column; full rooms must stay full across restarts.
    if "remaining_capacity" in added:
        conn.execute(text("UPDATE rooms SET remaining_capacity = capacity"))
    conn.execute(
        text(
            """
            UPDATE rooms
            SET is_occupied = CASE WHEN remaining_capacity <= 0 THEN TRUE ELSE FALSE END
            """.strip()
        )
    )
    logger.warning("Upgraded legacy rooms table (added columns: %s)", ", ".join(added))


def bootstrap_schema(engine: Engine | None = None) -> None:
    """Create the rooms table if missing and upgrade legacy layouts.

    This function is safe to run on every startup.
    """

    with (engine or ENGINE).begin() as conn:
        _ensure_rooms_schema(conn)
