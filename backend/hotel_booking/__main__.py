"""
Run the API with uvicorn: `python -m hotel_booking` or `hotel-booking`.
"""

import uvicorn

from hotel_booking.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "hotel_booking.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        log_config=None,  # structlog owns the root logger
    )


if __name__ == "__main__":
    main()
