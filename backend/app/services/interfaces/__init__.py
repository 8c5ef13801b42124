"""
Service interfaces for dependency inversion.
Allows swapping implementations without changing business logic.
"""

from .stores import BookingStore, EnrollmentLookup, RoomStore, TicketLookup
from .unit_of_work import AbstractUnitOfWork

__all__ = [
    'AbstractUnitOfWork',
    'BookingStore',
    'EnrollmentLookup',
    'RoomStore',
    'TicketLookup',
]
