from app.schemas.user import SignUpInput, SignInInput, UserResponse, SessionResponse
from app.schemas.booking import BookingInput, BookingIdResponse, BookingResponse, RoomResponse

__all__ = [
    "SignUpInput", "SignInInput", "UserResponse", "SessionResponse",
    "BookingInput", "BookingIdResponse", "BookingResponse", "RoomResponse",
]
