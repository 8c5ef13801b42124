"""
Booking service: eligibility checks and capacity-safe room reservation.

ELIGIBILITY
===========

A user may hold a room only if, in this order:
  1. they have an enrollment                       (else NotFound)
  2. the enrollment has a ticket                   (else NotFound)
  3. the ticket is PAID, in person, with hotel     (else Forbidden)
  4. the target room exists                        (else NotFound)
  5. the target room has a free slot               (else Forbidden)

Entitlement is checked before availability, so a user without a valid
ticket never learns anything about a room's capacity.

CONCURRENCY STRATEGY: Guarded Atomic Deltas in One Transaction
===============================================================

Problem:
  Two users read capacity=1 for the same room, both pass validation,
  both decrement. Result: capacity -1, room oversold.

Solution:
  Room.capacity is only changed with relative UPDATEs, and the claim is
  guarded by the row it modifies:

    UPDATE rooms SET capacity = capacity - 1
    WHERE id = :room_id AND capacity >= 1

  If no row was updated another request took the last slot first and the
  booking is refused. The CHECK (capacity >= 0) constraint is the final
  safety net.

  Every create and swap runs inside one unit of work. A swap releases the
  old slot and claims the new one in the same transaction, so a failure
  between the two steps rolls the release back instead of leaking a slot.
  The two UPDATEs are issued in ascending room id order so that two users
  swapping in opposite directions lock the rows in the same order.
"""

from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ForbiddenError, NotFoundError
from app.core.logging import get_logger
from app.core.metrics import track_booking
from app.models import Booking, Ticket, TicketStatus
from app.services.interfaces import AbstractUnitOfWork

logger = get_logger(__name__)


def _ticket_allows_hotel(ticket: Ticket) -> bool:
    ticket_type = ticket.ticket_type
    return (
        ticket.status != TicketStatus.RESERVED
        and not ticket_type.is_remote
        and ticket_type.includes_hotel
    )


class BookingService:

    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    async def check_entitlement(self, user_id: int) -> Ticket:
        """Steps 1-3: the user holds a paid, in-person ticket that includes a hotel."""
        enrollment = await self.uow.enrollments.find_by_user_id(user_id)
        if not enrollment:
            raise NotFoundError("Enrollment not found")

        ticket = await self.uow.tickets.find_by_enrollment_id(enrollment.id)
        if not ticket:
            raise NotFoundError("Ticket not found")

        if not _ticket_allows_hotel(ticket):
            logger.info(
                "booking_rejected",
                user_id=user_id,
                reason="ticket_not_eligible",
                ticket_status=ticket.status,
            )
            raise ForbiddenError("Ticket does not include a hotel stay")
        return ticket

    async def check_room_available(self, room_id: int) -> None:
        """Steps 4-5: the room exists and has at least one free slot."""
        room = await self.uow.rooms.find(room_id)
        if not room:
            raise NotFoundError(f"Room {room_id} not found")

        if room.capacity < 1:
            logger.info("booking_rejected", room_id=room_id, reason="room_full")
            raise ForbiddenError("Room is full")

    async def validate(self, user_id: int, room_id: int) -> None:
        await self.check_entitlement(user_id)
        await self.check_room_available(room_id)

    @track_booking("get")
    async def get_booking(self, user_id: int) -> Booking:
        async with self.uow:
            booking = await self.uow.bookings.find_by_user_id(user_id)
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    @track_booking("create")
    async def create_booking(self, user_id: int, room_id: int) -> Booking:
        async with self.uow:
            await self.validate(user_id, room_id)

            if await self.uow.bookings.find_by_user_id(user_id):
                logger.info("booking_rejected", user_id=user_id, reason="already_booked")
                raise ForbiddenError("User already has a booking")

            await self._claim_slot(room_id)
            try:
                booking = await self.uow.bookings.create(user_id, room_id)
            except IntegrityError as e:
                # A concurrent request by the same user inserted first
                raise ForbiddenError("User already has a booking") from e

            await self.uow.commit()

        logger.info("booking_created", booking_id=booking.id, user_id=user_id, room_id=room_id)
        return booking

    @track_booking("update")
    async def update_booking(self, user_id: int, booking_id: int, room_id: int) -> Booking:
        async with self.uow:
            await self.check_entitlement(user_id)

            current = await self.uow.bookings.find_by_user_id(user_id)
            if not current:
                logger.info("booking_rejected", user_id=user_id, reason="no_booking_to_swap")
                raise ForbiddenError("User has no booking to change")

            if current.id != booking_id:
                logger.warning(
                    "booking_rejected",
                    user_id=user_id,
                    booking_id=booking_id,
                    reason="not_booking_owner",
                )
                raise ForbiddenError("Booking does not belong to user")

            await self.check_room_available(room_id)

            old_room_id = current.room_id
            if old_room_id == room_id:
                logger.info("booking_unchanged", booking_id=booking_id, user_id=user_id, room_id=room_id)
                return current

            await self._swap_slots(old_room_id, room_id)
            booking = await self.uow.bookings.update_room(booking_id, room_id)
            await self.uow.commit()

        logger.info(
            "booking_swapped",
            booking_id=booking_id,
            user_id=user_id,
            from_room_id=old_room_id,
            to_room_id=room_id,
        )
        return booking

    async def _claim_slot(self, room_id: int) -> None:
        if not await self.uow.rooms.decrement_capacity(room_id):
            logger.info("booking_rejected", room_id=room_id, reason="room_filled_concurrently")
            raise ForbiddenError("Room is full")

    async def _swap_slots(self, old_room_id: int, new_room_id: int) -> None:
        if old_room_id < new_room_id:
            await self.uow.rooms.increment_capacity(old_room_id)
            await self._claim_slot(new_room_id)
        else:
            await self._claim_slot(new_room_id)
            await self.uow.rooms.increment_capacity(old_room_id)
