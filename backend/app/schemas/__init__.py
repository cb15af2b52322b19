from app.schemas.booking import (
    BookingCreate, BookingUpdate, BookingResponse, BookingIdResponse, RoomResponse,
)

__all__ = [
    "BookingCreate", "BookingUpdate", "BookingResponse", "BookingIdResponse", "RoomResponse",
]
