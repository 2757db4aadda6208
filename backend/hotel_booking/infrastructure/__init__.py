"""
Infrastructure layer - external system integrations.
Keeps business logic clean from implementation details.
"""

from .repositories import SqlBookingRepository, SqlEnrollmentRepository, SqlTicketRepository

__all__ = ['SqlBookingRepository', 'SqlEnrollmentRepository', 'SqlTicketRepository']
