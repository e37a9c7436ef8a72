import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hotel_booking.api.routers.bookings import router as bookings_router
from hotel_booking.api.routers.health import router as health_router
from hotel_booking.api.routers.hotels import router as hotels_router
from hotel_booking.api.routers.sessions import router as sessions_router
from hotel_booking.config import get_settings
from hotel_booking.domain.errors import DomainError

# Configure structured logging
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Error code -> HTTP status
ERROR_STATUS_CODES = {
    "VALIDATION_ERROR": 400,
    "INVALID_IDENTIFIER": 400,
    "SESSION_NOT_FOUND": 404,
    "BOOKING_NOT_FOUND": 404,
    "INVALID_SESSION_PHASE": 409,
    "SESSION_BUSY": 409,
    "INVENTORY_UNAVAILABLE": 409,
    "PRICE_CHANGE_NOT_ACKNOWLEDGED": 409,
    "CANCELLATION_NOT_ALLOWED": 409,
    "ALREADY_CANCELLED": 409,
    "SESSION_EXPIRED": 410,
    "COMMIT_FAILED": 502,
    "COMMIT_UNKNOWN": 502,
    "CANCELLATION_FAILED": 502,
    "SUPPLIER_ERROR": 502,
    "NETWORK_ERROR": 503,
    "CIRCUIT_OPEN": 503,
    "TIMEOUT": 504,
}

app = FastAPI(
    title="Hotel Booking API",
    version="0.1.0",
)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    """Known errors: stable code plus a message safe to show the end user."""
    status_code = ERROR_STATUS_CODES.get(exc.code, 500)
    logger.log(
        logging.ERROR if status_code >= 500 else logging.WARNING,
        "Request failed with domain error",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "supplier_payload": exc.supplier_payload,
            "path": request.url.path,
            "method": request.method,
        },
    )
    return JSONResponse(
        status_code=status_code,
        content={"code": exc.code, "message": exc.user_message},
    )


# Global Exception Handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler to prevent stack trace exposure to clients.
    All unhandled exceptions are logged internally and return a generic error message.
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
            "client_host": request.client.host if request.client else None,
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred. Please contact support with the error_id if the issue persists.",
            "error_id": error_id,
        },
    )


app.include_router(health_router, tags=["Health"])
app.include_router(hotels_router, prefix="/api/v1", tags=["Hotels"])
app.include_router(sessions_router, prefix="/api/v1", tags=["Booking Sessions"])
app.include_router(bookings_router, prefix="/api/v1", tags=["Bookings"])
