"""
Hotel booking endpoints. HTTP concerns only: the service decides, domain
errors are turned into status codes by the handlers in app.api.errors.
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_booking_service
from app.core.security import get_current_user_id
from app.schemas.booking import BookingCreate, BookingUpdate, BookingResponse, BookingIdResponse
from app.services.booking_service import BookingService

router = APIRouter(prefix="/booking", tags=["Booking"])


@router.get("", response_model=BookingResponse)
async def get_booking(
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """Get the authenticated user's booking, with its room."""
    return await service.get_booking_by_user_id(user_id)


@router.post("", response_model=BookingIdResponse)
async def create_booking(
    booking_data: BookingCreate,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """
    Book a room.

    403 if the ticket is unpaid, remote or excludes hotel, or the room is full.
    404 if the room does not exist.
    """
    booking_id = await service.create_booking(user_id, booking_data.room_id)
    return BookingIdResponse(booking_id=booking_id)


@router.put("/{booking_id}", response_model=BookingIdResponse)
async def update_booking(
    booking_id: int,
    booking_data: BookingUpdate,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """Move a booking to another room."""
    updated_id = await service.update_booking(booking_id, booking_data.room_id)
    return BookingIdResponse(booking_id=updated_id)
