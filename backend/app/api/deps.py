"""
Dependency providers wiring services to request-scoped resources.
"""

from fastapi import Depends

from app.infrastructure.unit_of_work import SqlAlchemyUnitOfWork, get_unit_of_work
from app.services.booking_service import BookingService


def get_booking_service(uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work)) -> BookingService:
    return BookingService(uow)
