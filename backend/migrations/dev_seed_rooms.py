from __future__ import annotations

import argparse

from core.bootstrap import bootstrap_schema
from core.database import SessionLocal
from core.errors import DuplicateRoomError
from services.room_store import create_room


# (room_no, capacity, has_ac, has_attached_washroom)
SAMPLE_ROOMS: list[tuple[str, int, bool, bool]] = [
    ("101", 4, True, False),
    ("102", 2, False, False),
    ("103", 3, True, True),
    ("201", 6, True, True),
    ("202", 5, False, True),
    ("301", 8, False, False),
]


def seed_rooms(db, rooms: list[tuple[str, int, bool, bool]]) -> tuple[int, int]:
    created = 0
    skipped = 0
    for room_no, capacity, has_ac, has_washroom in rooms:
        try:
            create_room(
                db,
                room_no=room_no,
                capacity=capacity,
                has_ac=has_ac,
                has_attached_washroom=has_washroom,
            )
        except DuplicateRoomError:
            skipped += 1
            continue
        created += 1
    return created, skipped


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed a sample room inventory using DATABASE_URL")
    parser.add_argument(
        "--no-bootstrap",
        action="store_true",
        help="Do not create/upgrade the rooms table before seeding",
    )
    args = parser.parse_args()

    if not args.no_bootstrap:
        bootstrap_schema()

    db = SessionLocal()
    try:
        created, skipped = seed_rooms(db, SAMPLE_ROOMS)
    finally:
        db.close()

    print(f"OK: created {created} room(s), skipped {skipped} existing")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
