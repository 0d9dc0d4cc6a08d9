from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.errors import DuplicateRoomError, InvalidArgumentError, RoomNotFoundError
from models.room import Room


logger = logging.getLogger(__name__)


def require_positive_int(value, *, field: str) -> int:
    # bool is an int subclass; True must not pass as 1.
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidArgumentError(f"{field} must be a positive integer")
    return value


def normalize_room_no(room_no) -> str:
    value = str(room_no or "").strip()
    if not value:
        raise InvalidArgumentError("room_no is required")
    return value


def _room_no_exists(db: Session, room_no: str) -> bool:
    return db.execute(select(Room.id).where(Room.room_no == room_no).limit(1)).first() is not None


def create_room(
    db: Session,
    *,
    room_no: str,
    capacity: int,
    has_ac: bool,
    has_attached_washroom: bool,
) -> Room:
    room_no = normalize_room_no(room_no)
    capacity = require_positive_int(capacity, field="capacity")

    if _room_no_exists(db, room_no):
        raise DuplicateRoomError(room_no)

    room = Room(
        room_no=room_no,
        capacity=capacity,
        remaining_capacity=capacity,
        has_ac=bool(has_ac),
        has_attached_washroom=bool(has_attached_washroom),
        is_occupied=False,
    )
    db.add(room)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        # A concurrent insert may have won the unique constraint after our check.
        if _room_no_exists(db, room_no):
            raise DuplicateRoomError(room_no)
        raise
    db.refresh(room)
    logger.info("Created room room_no=%s capacity=%d", room_no, capacity)
    return room


def get_room(db: Session, room_no: str) -> Room:
    room_no = normalize_room_no(room_no)
    room = db.execute(select(Room).where(Room.room_no == room_no)).scalar_one_or_none()
    if room is None:
        raise RoomNotFoundError(room_no)
    return room


def list_rooms(db: Session) -> list[Room]:
    return list(db.execute(select(Room).order_by(Room.room_no.asc())).scalars().all())


def delete_room(db: Session, room_no: str) -> bool:
    """Delete a room by number. Returns False (not an error) when nothing was removed."""

    room_no = normalize_room_no(room_no)
    result = db.execute(delete(Room).where(Room.room_no == room_no))
    db.commit()
    deleted = (result.rowcount or 0) > 0
    if deleted:
        logger.info("Deleted room room_no=%s", room_no)
    return deleted
