"""
Enrollment model: a user's registration for the event.
A user has at most one enrollment (unique user_id).
"""

from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from hotel_booking.db.base import Base, TimestampMixin


class Enrollment(Base, TimestampMixin):
    __tablename__ = "enrollments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    cpf = Column(String(14), nullable=False, unique=True)
    phone = Column(String(20), nullable=False)

    # Relationships
    user = relationship("User", back_populates="enrollment")
    tickets = relationship("Ticket", back_populates="enrollment")

    def __repr__(self) -> str:
        return f"<Enrollment(id={self.id}, user={self.user_id})>"
