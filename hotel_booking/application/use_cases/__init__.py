"""Use cases of the hotel booking core."""

from hotel_booking.application.use_cases.booking_management import BookingManagementService
from hotel_booking.application.use_cases.booking_session_machine import BookingSessionMachine
from hotel_booking.application.use_cases.get_hotel_details import GetHotelDetailsUseCase
from hotel_booking.application.use_cases.reconcile_price import reconcile_price_lock
from hotel_booking.application.use_cases.search_hotels import (
    HotelFilters,
    HotelSearchResult,
    MealPlan,
    SearchHotelsUseCase,
    SortKey,
    filter_results,
    sort_results,
)

__all__ = [
    # Search
    "SearchHotelsUseCase",
    "HotelSearchResult",
    "HotelFilters",
    "MealPlan",
    "SortKey",
    "filter_results",
    "sort_results",
    "GetHotelDetailsUseCase",
    # Booking
    "BookingSessionMachine",
    "reconcile_price_lock",
    "BookingManagementService",
]
