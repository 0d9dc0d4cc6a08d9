from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import case, select, update
from sqlalchemy.orm import Session

from models.room import Room
from services.room_store import require_positive_int


logger = logging.getLogger(__name__)


NO_ROOM_AVAILABLE = "No room available"


@dataclass(frozen=True)
class AllocationResult:
    allocated: bool
    room_no: str | None = None
    capacity: int | None = None
    remaining_capacity: int | None = None
    has_ac: bool | None = None
    has_attached_washroom: bool | None = None
    is_occupied: bool | None = None

    @classmethod
    def no_room_available(cls) -> "AllocationResult":
        return cls(allocated=False)

    @property
    def message(self) -> str | None:
        return None if self.allocated else NO_ROOM_AVAILABLE


def select_best_fit(
    db: Session,
    *,
    students: int,
    needs_ac: bool = False,
    needs_washroom: bool = False,
) -> Room | None:
    """Smallest-capacity room that currently fits ``students`` and the amenity needs.

    Equal capacities resolve to the lexicographically smallest room_no.
    """

    q = select(Room).where(Room.remaining_capacity >= students)
    if needs_ac:
        q = q.where(Room.has_ac.is_(True))
    if needs_washroom:
        q = q.where(Room.has_attached_washroom.is_(True))
    q = q.order_by(Room.capacity.asc(), Room.room_no.asc()).limit(1)
    return db.execute(q).scalars().first()


def commit_allocation(db: Session, *, room_no: str, students: int) -> int | None:
    """Atomically take ``students`` seats from ``room_no``.

    The WHERE clause re-checks remaining capacity at write time, so concurrent
    commits can never drive a room below zero. Returns the new remaining
    capacity, or None when the room no longer fits (nothing is written).
    """

    stmt = (
        update(Room)
        .where(Room.room_no == room_no)
        .where(Room.remaining_capacity >= students)
        .values(
            remaining_capacity=Room.remaining_capacity - students,
            is_occupied=case((Room.remaining_capacity - students <= 0, True), else_=False),
        )
        .returning(Room.remaining_capacity)
        .execution_options(synchronize_session=False)
    )
    try:
        remaining = db.execute(stmt).scalar_one_or_none()
        if remaining is None:
            db.rollback()
            return None
        db.commit()
    except Exception:
        db.rollback()
        raise
    return int(remaining)


def allocate_room(
    db: Session,
    *,
    students: int,
    needs_ac: bool = False,
    needs_washroom: bool = False,
) -> AllocationResult:
    students = require_positive_int(students, field="students")
    needs_ac = bool(needs_ac)
    needs_washroom = bool(needs_washroom)

    room = select_best_fit(db, students=students, needs_ac=needs_ac, needs_washroom=needs_washroom)
    if room is None:
        logger.debug(
            "No candidate room for students=%d needs_ac=%s needs_washroom=%s",
            students,
            needs_ac,
            needs_washroom,
        )
        return AllocationResult.no_room_available()

    # Snapshot identity before the commit expires the ORM instance.
    room_no = room.room_no
    capacity = room.capacity
    has_ac = room.has_ac
    has_attached_washroom = room.has_attached_washroom

    # Single attempt: a lost race is reported as no room, not retried elsewhere.
    remaining = commit_allocation(db, room_no=room_no, students=students)
    if remaining is None:
        logger.info("Allocation conflict on room_no=%s for students=%d", room_no, students)
        return AllocationResult.no_room_available()

    logger.info("Allocated room_no=%s students=%d remaining_capacity=%d", room_no, students, remaining)
    return AllocationResult(
        allocated=True,
        room_no=room_no,
        capacity=capacity,
        remaining_capacity=remaining,
        has_ac=has_ac,
        has_attached_washroom=has_attached_washroom,
        is_occupied=remaining <= 0,
    )
