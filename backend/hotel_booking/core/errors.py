"""
Domain errors raised by the booking pipeline.

Every error carries an explicit kind; the HTTP status is looked up from
STATUS_BY_KIND at the API boundary (see exception_handlers.py).
"""

from enum import Enum

from fastapi import status


class BookingErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    REQUIREMENTS_NOT_MET = "requirements_not_met"
    NO_VACANCY = "no_vacancy"


STATUS_BY_KIND = {
    BookingErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    BookingErrorKind.REQUIREMENTS_NOT_MET: status.HTTP_402_PAYMENT_REQUIRED,
    BookingErrorKind.NO_VACANCY: status.HTTP_403_FORBIDDEN,
}


class BookingError(Exception):
    def __init__(self, kind: BookingErrorKind, message: str):
        self.kind = kind
        self.message = message
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def __repr__(self) -> str:
        return f"<BookingError(kind={self.kind.value}, message={self.message!r})>"


class NotFoundError(BookingError):
    def __init__(self, message: str = "No result for this search!"):
        super().__init__(BookingErrorKind.NOT_FOUND, message)


class RequirementsNotMetError(BookingError):
    def __init__(self, message: str = "Booking requirements not met"):
        super().__init__(BookingErrorKind.REQUIREMENTS_NOT_MET, message)


class NoVacancyError(BookingError):
    def __init__(self, message: str = "No vacancy"):
        super().__init__(BookingErrorKind.NO_VACANCY, message)
