"""
Domain layer - hotel booking core.

Pure business logic, no framework dependencies.

Layout:
- entities/: search criteria, offers, the booking session, committed bookings
- value_objects/: immutable values (Money, StayPeriod)
- errors.py: the error taxonomy shared by every operation
"""

from hotel_booking.domain.entities import (
    BookingListResult,
    BookingSession,
    BookingStatus,
    BookingSummary,
    CancellationOutcome,
    CommittedBooking,
    ContactInfo,
    CustomerDetails,
    Guest,
    GuestType,
    HotelDetails,
    HotelPrice,
    HotelResult,
    PriceLock,
    Reconciliation,
    RoomGuests,
    RoomRequest,
    SearchCriteria,
    SessionPhase,
)
from hotel_booking.domain.errors import (
    AlreadyCancelledError,
    BookingNotFoundError,
    CancellationFailedError,
    CancellationNotAllowedError,
    CommitFailedError,
    CommitUnknownError,
    DomainError,
    InvalidIdentifierError,
    InvalidSessionPhaseError,
    InventoryUnavailableError,
    PriceChangeNotAcknowledgedError,
    SessionBusyError,
    SessionExpiredError,
    SessionNotFoundError,
    SupplierError,
    SupplierNetworkError,
    SupplierTimeoutError,
    SupplierUnavailableError,
    ValidationError,
)
from hotel_booking.domain.value_objects import Money, StayPeriod

__all__ = [
    # Entities
    "SearchCriteria",
    "RoomRequest",
    "HotelResult",
    "HotelPrice",
    "HotelDetails",
    "BookingSession",
    "SessionPhase",
    "PriceLock",
    "Reconciliation",
    "CustomerDetails",
    "RoomGuests",
    "Guest",
    "GuestType",
    "ContactInfo",
    "CommittedBooking",
    "BookingStatus",
    "BookingSummary",
    "BookingListResult",
    "CancellationOutcome",
    # Value Objects
    "Money",
    "StayPeriod",
    # Errors
    "DomainError",
    "ValidationError",
    "InvalidIdentifierError",
    "InvalidSessionPhaseError",
    "SessionBusyError",
    "SessionNotFoundError",
    "SessionExpiredError",
    "InventoryUnavailableError",
    "PriceChangeNotAcknowledgedError",
    "CommitFailedError",
    "CommitUnknownError",
    "BookingNotFoundError",
    "CancellationNotAllowedError",
    "AlreadyCancelledError",
    "CancellationFailedError",
    "SupplierNetworkError",
    "SupplierTimeoutError",
    "SupplierUnavailableError",
    "SupplierError",
]
