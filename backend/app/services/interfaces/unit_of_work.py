"""
Unit of work: one transaction spanning every store it exposes.

Usage:
    async with uow:
        ...
        await uow.commit()

Leaving the block with an exception rolls the transaction back, so a
multi-step capacity change is applied completely or not at all.
"""

from abc import ABC, abstractmethod

from app.services.interfaces.stores import BookingStore, EnrollmentLookup, RoomStore, TicketLookup


class AbstractUnitOfWork(ABC):
    enrollments: EnrollmentLookup
    tickets: TicketLookup
    rooms: RoomStore
    bookings: BookingStore

    async def __aenter__(self) -> "AbstractUnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            await self.rollback()

    @abstractmethod
    async def commit(self) -> None:
        pass

    @abstractmethod
    async def rollback(self) -> None:
        pass
