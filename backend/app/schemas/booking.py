"""
Pydantic schemas for booking-related request/response validation.
JSON keys are camelCase; Python attributes stay snake_case.
"""

from datetime import datetime
from pydantic import BaseModel, Field


class BookingCreate(BaseModel):
    room_id: int = Field(..., alias="roomId")

    model_config = {"populate_by_name": True}


class BookingUpdate(BookingCreate):
    pass


class RoomResponse(BaseModel):
    id: int
    name: str
    capacity: int
    hotel_id: int = Field(alias="hotelId")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = {"from_attributes": True, "populate_by_name": True}


class BookingResponse(BaseModel):
    id: int
    user_id: int = Field(alias="userId")
    room_id: int = Field(alias="roomId")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    room: RoomResponse = Field(alias="Room")

    model_config = {"from_attributes": True, "populate_by_name": True}


class BookingIdResponse(BaseModel):
    booking_id: int = Field(alias="bookingId")

    model_config = {"populate_by_name": True}
