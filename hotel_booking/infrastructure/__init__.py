"""
Infrastructure layer - hotel booking core.

Concrete implementations of the application ports.

Layout:
- gateways/: HTTP adapter for the hotel supplier
- in_memory/: session store, booking repo and stub supplier
- circuit_breaker.py / retry.py: resilience around supplier calls
- fallback_catalog.py: degraded search results
"""

from hotel_booking.infrastructure.circuit_breaker import build_supplier_breaker, supplier_breaker
from hotel_booking.infrastructure.fallback_catalog import build_fallback_hotels
from hotel_booking.infrastructure.gateways import TboHotelSupplierGateway
from hotel_booking.infrastructure.in_memory import (
    InMemoryCommittedBookingRepo,
    InMemorySessionStore,
    StubHotelSupplierGateway,
)
from hotel_booking.infrastructure.retry import retry_async

__all__ = [
    # Gateways
    "TboHotelSupplierGateway",
    "StubHotelSupplierGateway",
    # In-Memory Implementations
    "InMemorySessionStore",
    "InMemoryCommittedBookingRepo",
    # Resilience
    "supplier_breaker",
    "build_supplier_breaker",
    "retry_async",
    "build_fallback_hotels",
]
