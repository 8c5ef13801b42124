"""
Concurrency tests: many users racing for the same room's last slots.

Each attempt runs in its own session and connection, the way concurrent
requests do in production, so the row lock and guarded UPDATE are exercised
for real.
"""

import asyncio

import pytest

from app.core.exceptions import ForbiddenError
from app.infrastructure.unit_of_work import SqlAlchemyUnitOfWork
from app.services.booking_service import BookingService

SLOTS = 5


async def attempt_booking(session_factory, user_id: int, room_id: int) -> str:
    async with session_factory() as session:
        service = BookingService(SqlAlchemyUnitOfWork(session))
        try:
            await service.create_booking(user_id, room_id)
        except ForbiddenError:
            return "forbidden"
        return "booked"


@pytest.mark.asyncio
async def test_concurrent_bookings_never_oversell(db_session, factory, session_factory):
    room = await factory.room(capacity=SLOTS)
    users = [await factory.eligible_user() for _ in range(SLOTS + 1)]

    results = await asyncio.gather(*(attempt_booking(session_factory, u.id, room.id) for u in users))

    assert results.count("booked") == SLOTS
    assert results.count("forbidden") == 1
    await db_session.refresh(room)
    assert room.capacity == 0


@pytest.mark.asyncio
async def test_concurrent_bookings_exactly_fill_room(db_session, factory, session_factory):
    room = await factory.room(capacity=SLOTS)
    users = [await factory.eligible_user() for _ in range(SLOTS)]

    results = await asyncio.gather(*(attempt_booking(session_factory, u.id, room.id) for u in users))

    assert results == ["booked"] * SLOTS
    await db_session.refresh(room)
    assert room.capacity == 0


@pytest.mark.asyncio
async def test_opposite_swaps_keep_total_capacity(db_session, factory, session_factory):
    hotel = await factory.hotel()
    room_a = await factory.room(capacity=2, hotel=hotel)
    room_b = await factory.room(capacity=2, hotel=hotel)
    user_a, user_b = await factory.eligible_user(), await factory.eligible_user()
    booking_a = await factory.booking(user_a, room_a)
    booking_b = await factory.booking(user_b, room_b)

    async def swap(user_id, booking_id, room_id):
        async with session_factory() as session:
            await BookingService(SqlAlchemyUnitOfWork(session)).update_booking(user_id, booking_id, room_id)

    await asyncio.gather(
        swap(user_a.id, booking_a.id, room_b.id),
        swap(user_b.id, booking_b.id, room_a.id),
    )

    await db_session.refresh(room_a)
    await db_session.refresh(room_b)
    assert (room_a.capacity, room_b.capacity) == (2, 2)


@pytest.mark.asyncio
async def test_concurrent_bookings_by_same_user_create_one(db_session, factory, session_factory):
    room = await factory.room(capacity=SLOTS)
    user = await factory.eligible_user()

    results = await asyncio.gather(*(attempt_booking(session_factory, user.id, room.id) for _ in range(2)))

    assert sorted(results) == ["booked", "forbidden"]
    await db_session.refresh(room)
    assert room.capacity == SLOTS - 1
