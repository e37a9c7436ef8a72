"""Interfaces (ports) of the application layer."""

from hotel_booking.application.interfaces.clock import Clock, FakeClock, SystemClock
from hotel_booking.application.interfaces.committed_booking_repo import CommittedBookingRepo
from hotel_booking.application.interfaces.hotel_supplier_gateway import (
    HotelSupplierGateway,
    SupplierResult,
)
from hotel_booking.application.interfaces.id_generator import (
    FakeIdGenerator,
    IdGenerator,
    RealIdGenerator,
)
from hotel_booking.application.interfaces.session_store import SessionStore

__all__ = [
    # Stores
    "SessionStore",
    "CommittedBookingRepo",
    # Gateways
    "HotelSupplierGateway",
    "SupplierResult",
    # Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
    "IdGenerator",
    "RealIdGenerator",
    "FakeIdGenerator",
]
