from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from models.room import Room
from services.room_store import require_positive_int


def search_rooms(
    db: Session,
    *,
    min_capacity: int | None = None,
    has_ac: bool | None = None,
    has_attached_washroom: bool | None = None,
) -> list[Room]:
    """Read-only filter over live room rows.

    ``min_capacity`` compares against *remaining* capacity, so rooms whose
    seats are already committed drop out. Filters left as None are not applied.
    """

    q = select(Room)
    if min_capacity is not None:
        min_capacity = require_positive_int(min_capacity, field="min_capacity")
        q = q.where(Room.remaining_capacity >= min_capacity)
    if has_ac is not None:
        q = q.where(Room.has_ac.is_(bool(has_ac)))
    if has_attached_washroom is not None:
        q = q.where(Room.has_attached_washroom.is_(bool(has_attached_washroom)))

    q = q.order_by(Room.capacity.asc(), Room.room_no.asc())
    return list(db.execute(q).scalars().all())
