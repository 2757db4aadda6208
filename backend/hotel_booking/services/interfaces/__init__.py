"""
Service interfaces for dependency inversion.
Allows swapping implementations without changing business logic.
"""

from .repositories import BookingRepository, EnrollmentRepository, TicketRepository

__all__ = ['BookingRepository', 'EnrollmentRepository', 'TicketRepository']
