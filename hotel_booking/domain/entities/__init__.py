"""Entities of the hotel booking domain."""

from hotel_booking.domain.entities.booking_session import BookingSession, SessionPhase
from hotel_booking.domain.entities.committed_booking import (
    BookingListResult,
    BookingStatus,
    BookingSummary,
    CancellationOutcome,
    CommittedBooking,
)
from hotel_booking.domain.entities.customer import (
    ContactInfo,
    CustomerDetails,
    Guest,
    GuestType,
    RoomGuests,
)
from hotel_booking.domain.entities.hotel import HotelDetails, HotelPrice, HotelResult
from hotel_booking.domain.entities.price_lock import PriceLock, Reconciliation
from hotel_booking.domain.entities.search_criteria import RoomRequest, SearchCriteria

__all__ = [
    # Search
    "SearchCriteria",
    "RoomRequest",
    "HotelResult",
    "HotelPrice",
    "HotelDetails",
    # Session
    "BookingSession",
    "SessionPhase",
    "PriceLock",
    "Reconciliation",
    "CustomerDetails",
    "RoomGuests",
    "Guest",
    "GuestType",
    "ContactInfo",
    # Committed bookings
    "CommittedBooking",
    "BookingStatus",
    "BookingSummary",
    "BookingListResult",
    "CancellationOutcome",
]
