"""In-memory implementations for local runs and tests."""

from hotel_booking.infrastructure.in_memory.committed_booking_repo import InMemoryCommittedBookingRepo
from hotel_booking.infrastructure.in_memory.session_store import InMemorySessionStore
from hotel_booking.infrastructure.in_memory.supplier_gateway import StubHotelSupplierGateway

__all__ = [
    # Stores
    "InMemorySessionStore",
    "InMemoryCommittedBookingRepo",
    # Gateways
    "StubHotelSupplierGateway",
]
