"""
SQLAlchemy implementations of the booking collaborators.

All stores share the session handed in by the unit of work, so every
statement below joins the same transaction.
"""

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models import Booking, Enrollment, Room, Ticket
from app.services.interfaces.stores import BookingStore, EnrollmentLookup, RoomStore, TicketLookup


class EnrollmentRepository(EnrollmentLookup):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_user_id(self, user_id: int) -> Optional[Enrollment]:
        result = await self.session.execute(
            select(Enrollment).where(Enrollment.user_id == user_id)
        )
        return result.scalar_one_or_none()


class TicketRepository(TicketLookup):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_enrollment_id(self, enrollment_id: int) -> Optional[Ticket]:
        result = await self.session.execute(
            select(Ticket)
            .where(Ticket.enrollment_id == enrollment_id)
            .options(selectinload(Ticket.ticket_type))
        )
        return result.scalar_one_or_none()


class RoomRepository(RoomStore):
    """
    Capacity changes are single UPDATE statements evaluated by the database:

        UPDATE rooms SET capacity = capacity - 1
        WHERE id = :room_id AND capacity >= 1

    The row lock taken by the UPDATE serializes concurrent claims on the same
    room, and the WHERE clause is re-checked against the committed value, so
    two requests can never both take the last slot.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find(self, room_id: int) -> Optional[Room]:
        # populate_existing: capacity changes behind the identity map's back
        result = await self.session.execute(
            select(Room)
            .where(Room.id == room_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def increment_capacity(self, room_id: int) -> None:
        await self.session.execute(
            update(Room)
            .where(Room.id == room_id)
            .values(capacity=Room.capacity + 1)
            .execution_options(synchronize_session=False)
        )

    async def decrement_capacity(self, room_id: int) -> bool:
        result = await self.session.execute(
            update(Room)
            .where(Room.id == room_id, Room.capacity >= 1)
            .values(capacity=Room.capacity - 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1


class BookingRepository(BookingStore):
    """Bookings are always returned with their room loaded."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _first(self, *criteria) -> Optional[Booking]:
        result = await self.session.execute(
            select(Booking)
            .where(*criteria)
            .options(selectinload(Booking.room))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def find_by_user_id(self, user_id: int) -> Optional[Booking]:
        return await self._first(Booking.user_id == user_id)

    async def create(self, user_id: int, room_id: int) -> Booking:
        booking = Booking(user_id=user_id, room_id=room_id)
        self.session.add(booking)
        await self.session.flush()
        return await self._first(Booking.id == booking.id)

    async def update_room(self, booking_id: int, room_id: int) -> Booking:
        await self.session.execute(
            update(Booking)
            .where(Booking.id == booking_id)
            .values(room_id=room_id)
            .execution_options(synchronize_session=False)
        )
        return await self._first(Booking.id == booking_id)
