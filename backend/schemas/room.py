from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class RoomBase(BaseModel):
    room_no: str = Field(min_length=1)
    capacity: int = Field(gt=0)
    has_ac: bool
    has_attached_washroom: bool


class RoomCreate(RoomBase):
    @field_validator("room_no")
    @classmethod
    def _strip_room_no(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("room_no must not be blank")
        return v


class RoomOut(RoomBase):
    id: int
    remaining_capacity: int
    is_occupied: bool
    created_at: datetime

    class Config:
        from_attributes = True


class AllocationRequest(BaseModel):
    students: int = Field(gt=0)
    needs_ac: bool = False
    needs_washroom: bool = False


class AllocationOut(BaseModel):
    allocated: bool
    message: str | None = None
    room_no: str | None = None
    capacity: int | None = None
    remaining_capacity: int | None = None
    has_ac: bool | None = None
    has_attached_washroom: bool | None = None
    is_occupied: bool | None = None
