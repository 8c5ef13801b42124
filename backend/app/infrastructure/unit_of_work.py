"""
SQLAlchemy unit of work bound to a single AsyncSession.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.infrastructure.repositories import (
    BookingRepository,
    EnrollmentRepository,
    RoomRepository,
    TicketRepository,
)
from app.services.interfaces.unit_of_work import AbstractUnitOfWork


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):

    def __init__(self, session: AsyncSession):
        self.session = session
        self.enrollments = EnrollmentRepository(session)
        self.tickets = TicketRepository(session)
        self.rooms = RoomRepository(session)
        self.bookings = BookingRepository(session)

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()


def get_unit_of_work(db: AsyncSession = Depends(get_db)) -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(db)
