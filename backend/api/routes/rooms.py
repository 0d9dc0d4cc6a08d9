from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.database import get_db
from core.errors import RoomNotFoundError
from schemas.room import AllocationOut, AllocationRequest, RoomCreate, RoomOut
from services.allocation import allocate_room as allocate_room_service
from services.room_search import search_rooms as search_rooms_service
from services.room_store import create_room as create_room_service
from services.room_store import delete_room as delete_room_service
from services.room_store import get_room as get_room_service
from services.room_store import list_rooms as list_rooms_service


router = APIRouter()


@router.get("/", response_model=list[RoomOut])
def list_rooms(db: Session = Depends(get_db)) -> list[RoomOut]:
    return list_rooms_service(db)


@router.post("/", response_model=RoomOut, status_code=201)
def create_room(payload: RoomCreate, db: Session = Depends(get_db)) -> RoomOut:
    return create_room_service(
        db,
        room_no=payload.room_no,
        capacity=payload.capacity,
        has_ac=payload.has_ac,
        has_attached_washroom=payload.has_attached_washroom,
    )


# Declared before /{room_no} so "search" is not captured as a room number.
@router.get("/search", response_model=list[RoomOut])
def search_rooms(
    min_capacity: int | None = Query(default=None, gt=0),
    has_ac: bool | None = Query(default=None),
    has_attached_washroom: bool | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[RoomOut]:
    return search_rooms_service(
        db,
        min_capacity=min_capacity,
        has_ac=has_ac,
        has_attached_washroom=has_attached_washroom,
    )


@router.post("/allocate", response_model=AllocationOut)
def allocate_room(payload: AllocationRequest, db: Session = Depends(get_db)) -> AllocationOut:
    result = allocate_room_service(
        db,
        students=payload.students,
        needs_ac=payload.needs_ac,
        needs_washroom=payload.needs_washroom,
    )
    # No room is a normal outcome: 200 with an explanatory payload.
    return AllocationOut(
        allocated=result.allocated,
        message=result.message,
        room_no=result.room_no,
        capacity=result.capacity,
        remaining_capacity=result.remaining_capacity,
        has_ac=result.has_ac,
        has_attached_washroom=result.has_attached_washroom,
        is_occupied=result.is_occupied,
    )


@router.get("/{room_no}", response_model=RoomOut)
def get_room(room_no: str, db: Session = Depends(get_db)) -> RoomOut:
    return get_room_service(db, room_no)


@router.delete("/{room_no}")
def delete_room(room_no: str, db: Session = Depends(get_db)) -> dict:
    if not delete_room_service(db, room_no):
        raise RoomNotFoundError(room_no.strip())
    return {"ok": True}
