"""
Application layer - hotel booking core.

Orchestrates the domain and defines the contracts with infrastructure.

Layout:
- use_cases/: search, hotel details, booking session machine, booking management
- interfaces/: ports (supplier gateway, session store, booking repo, clock, ids)
- supplier_mapping.py: the only translation between supplier payloads and domain types
"""

from hotel_booking.application.interfaces import (
    Clock,
    CommittedBookingRepo,
    FakeClock,
    FakeIdGenerator,
    HotelSupplierGateway,
    IdGenerator,
    RealIdGenerator,
    SessionStore,
    SupplierResult,
    SystemClock,
)
from hotel_booking.application.use_cases import (
    BookingManagementService,
    BookingSessionMachine,
    GetHotelDetailsUseCase,
    HotelFilters,
    HotelSearchResult,
    MealPlan,
    SearchHotelsUseCase,
    SortKey,
    filter_results,
    reconcile_price_lock,
    sort_results,
)

__all__ = [
    # Use cases
    "SearchHotelsUseCase",
    "HotelSearchResult",
    "HotelFilters",
    "MealPlan",
    "SortKey",
    "filter_results",
    "sort_results",
    "GetHotelDetailsUseCase",
    "BookingSessionMachine",
    "reconcile_price_lock",
    "BookingManagementService",
    # Interfaces - Stores
    "SessionStore",
    "CommittedBookingRepo",
    # Interfaces - Gateways
    "HotelSupplierGateway",
    "SupplierResult",
    # Interfaces - Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
    "IdGenerator",
    "RealIdGenerator",
    "FakeIdGenerator",
]
