from __future__ import annotations


class RoomAllocationError(Exception):
    """Base class for errors raised by the room store and allocation engine."""

    code = "ROOM_ALLOCATION_ERROR"
    status_code = 400

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.code)
        self.message = message or self.code


class InvalidArgumentError(RoomAllocationError):
    """Non-positive capacity/students, empty room number, etc. Raised before touching storage."""

    code = "INVALID_ARGUMENT"
    status_code = 400


class DuplicateRoomError(RoomAllocationError):
    code = "ROOM_ALREADY_EXISTS"
    status_code = 409

    def __init__(self, room_no: str) -> None:
        super().__init__(f"Room number already exists: {room_no}")
        self.room_no = room_no


class RoomNotFoundError(RoomAllocationError):
    code = "ROOM_NOT_FOUND"
    status_code = 404

    def __init__(self, room_no: str) -> None:
        super().__init__(f"Room not found: {room_no}")
        self.room_no = room_no
