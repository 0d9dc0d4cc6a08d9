from __future__ import annotations

import argparse

from sqlalchemy import case, func, or_, select
from sqlalchemy.orm import Session

from core.database import SessionLocal
from models.room import Room


def capacity_summary(db: Session) -> dict[str, int]:
    row = db.execute(
        select(
            func.count(Room.id),
            func.coalesce(func.sum(case((Room.is_occupied.is_(True), 1), else_=0)), 0),
            func.coalesce(func.sum(Room.capacity), 0),
            func.coalesce(func.sum(Room.remaining_capacity), 0),
        )
    ).one()
    return {
        "rooms": int(row[0]),
        "full_rooms": int(row[1]),
        "total_seats": int(row[2]),
        "remaining_seats": int(row[3]),
    }


def find_invariant_violations(db: Session) -> list[Room]:
    """Rooms whose remaining capacity is out of range or whose is_occupied flag disagrees with it."""

    q = (
        select(Room)
        .where(
            or_(
                Room.remaining_capacity < 0,
                Room.remaining_capacity > Room.capacity,
                Room.is_occupied != (Room.remaining_capacity <= 0),
            )
        )
        .order_by(Room.room_no.asc())
    )
    return list(db.execute(q).scalars().all())


def main() -> int:
    parser = argparse.ArgumentParser(description="Print room capacity totals and check capacity invariants")
    parser.add_argument("--list", action="store_true", help="Also print every room")
    args = parser.parse_args()

    db = SessionLocal()
    try:
        print(capacity_summary(db))
        if args.list:
            for room in db.execute(select(Room).order_by(Room.room_no.asc())).scalars():
                print(
                    f"{room.room_no}: {room.remaining_capacity}/{room.capacity}"
                    f" ac={room.has_ac} washroom={room.has_attached_washroom} occupied={room.is_occupied}"
                )
        violations = find_invariant_violations(db)
    finally:
        db.close()

    for room in violations:
        print(f"VIOLATION {room.room_no}: remaining={room.remaining_capacity} capacity={room.capacity} occupied={room.is_occupied}")
    return 1 if violations else 0


if __name__ == "__main__":
    raise SystemExit(main())
