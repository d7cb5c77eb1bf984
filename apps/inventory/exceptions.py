"""Inventory errors surfaced through the API."""

from shared.application.exceptions import ApplicationError


class RoomNumberTakenError(ApplicationError):
    """Another room already uses the requested room number."""

    error_code = "ROOM_NUMBER_TAKEN"
    status_code = 409

    def __init__(self, room_number: str):
        super().__init__(
            f"Room number {room_number} already exists",
            details={"room_number": room_number},
        )
