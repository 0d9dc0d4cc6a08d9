from __future__ import annotations

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, Text, UniqueConstraint
from sqlalchemy.sql import func

from models.base import Base


class Room(Base):
    __tablename__ = "rooms"

    # SERIAL on Postgres, rowid alias on SQLite; matches tables created by earlier deployments.
    id = Column(Integer, primary_key=True, autoincrement=True)
    room_no = Column(Text, nullable=False)
    capacity = Column(Integer, nullable=False)
    remaining_capacity = Column(Integer, nullable=False)
    has_ac = Column(Boolean, nullable=False, default=False)
    has_attached_washroom = Column(Boolean, nullable=False, default=False)
    # Derived from remaining_capacity; only the allocation commit writes both.
    is_occupied = Column(Boolean, nullable=False, default=False)
    # Client-side default too: upgraded legacy tables get the column without a server default.
    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now(), server_default=func.now())

    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_rooms_capacity_positive"),
        CheckConstraint(
            "remaining_capacity >= 0 AND remaining_capacity <= capacity",
            name="ck_rooms_remaining_capacity",
        ),
        UniqueConstraint("room_no", name="uq_rooms_room_no"),
    )

    def __repr__(self) -> str:
        return f"<Room {self.room_no} {self.remaining_capacity}/{self.capacity}>"
