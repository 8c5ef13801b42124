from app.models.user import User
from app.models.enrollment import Enrollment
from app.models.ticket import Ticket, TicketType, TicketStatus
from app.models.hotel import Hotel, Room
from app.models.booking import Booking

__all__ = [
    "User", "Enrollment",
    "Ticket", "TicketType", "TicketStatus",
    "Hotel", "Room", "Booking",
]
