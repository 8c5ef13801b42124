"""
Collaborator interfaces the booking service depends on.

The service only sees these abstractions; the SQLAlchemy implementations
live in app.infrastructure.repositories and tests substitute in-memory ones.
"""

from abc import ABC, abstractmethod
from typing import Optional

from app.models import Booking, Enrollment, Room, Ticket


class EnrollmentLookup(ABC):

    @abstractmethod
    async def find_by_user_id(self, user_id: int) -> Optional[Enrollment]:
        pass


class TicketLookup(ABC):

    @abstractmethod
    async def find_by_enrollment_id(self, enrollment_id: int) -> Optional[Ticket]:
        """Return the enrollment's ticket with its ticket_type loaded."""
        pass


class RoomStore(ABC):
    """
    Room reads and capacity deltas.

    Capacity is never written as an absolute value. Both deltas must be a
    single atomic statement in the backing store.
    """

    @abstractmethod
    async def find(self, room_id: int) -> Optional[Room]:
        pass

    @abstractmethod
    async def increment_capacity(self, room_id: int) -> None:
        """Release one slot."""
        pass

    @abstractmethod
    async def decrement_capacity(self, room_id: int) -> bool:
        """
        Claim one slot.

        Returns:
            True if a slot was claimed
            False if the room had no free slot left
        """
        pass


class BookingStore(ABC):

    @abstractmethod
    async def find_by_user_id(self, user_id: int) -> Optional[Booking]:
        """Return the user's booking with its room loaded."""
        pass

    @abstractmethod
    async def create(self, user_id: int, room_id: int) -> Booking:
        pass

    @abstractmethod
    async def update_room(self, booking_id: int, room_id: int) -> Booking:
        pass
