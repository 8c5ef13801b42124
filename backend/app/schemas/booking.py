"""
Pydantic schemas for booking request/response validation.

Field names on the wire are camelCase (roomId, bookingId, hotelId, Room);
Python attributes stay snake_case and are mapped with aliases.
"""

from pydantic import BaseModel, ConfigDict, Field


class BookingInput(BaseModel):
    room_id: int = Field(..., ge=1, alias="roomId")

    model_config = ConfigDict(populate_by_name=True)


class BookingIdResponse(BaseModel):
    booking_id: int = Field(..., serialization_alias="bookingId")


class RoomResponse(BaseModel):
    id: int
    name: str
    capacity: int
    hotel_id: int = Field(..., serialization_alias="hotelId")

    model_config = ConfigDict(from_attributes=True)


class BookingResponse(BaseModel):
    id: int
    room: RoomResponse = Field(..., serialization_alias="Room")

    model_config = ConfigDict(from_attributes=True)
