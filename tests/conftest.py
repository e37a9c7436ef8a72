"""
Pytest configuration and shared fixtures.

Everything runs against the in-memory stores and the stub supplier, with
a fixed clock at 2024-03-01 09:00 UTC so fixture stays lie in the future.
"""

from datetime import date, datetime, timezone

import pytest

from hotel_booking.application import supplier_mapping
from hotel_booking.application.interfaces.clock import FakeClock
from hotel_booking.application.interfaces.id_generator import FakeIdGenerator
from hotel_booking.application.use_cases.booking_management import BookingManagementService
from hotel_booking.application.use_cases.booking_session_machine import BookingSessionMachine
from hotel_booking.application.use_cases.search_hotels import SearchHotelsUseCase
from hotel_booking.domain.entities.customer import CustomerDetails, Guest, GuestType, RoomGuests
from hotel_booking.domain.entities.search_criteria import RoomRequest, SearchCriteria
from hotel_booking.infrastructure.circuit_breaker import supplier_breaker
from hotel_booking.infrastructure.fallback_catalog import build_fallback_hotels
from hotel_booking.infrastructure.in_memory import supplier_fixtures
from hotel_booking.infrastructure.in_memory.committed_booking_repo import InMemoryCommittedBookingRepo
from hotel_booking.infrastructure.in_memory.session_store import InMemorySessionStore
from hotel_booking.infrastructure.in_memory.supplier_gateway import StubHotelSupplierGateway

FIXED_NOW = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
CONTEXT_ID = "ctx-web-0001"


def offer(booking_code: str):
    """HotelResult for a stub fixture; marker suffixes such as -FAIL are kept."""
    for hotel in supplier_fixtures.HOTELS:
        if booking_code == hotel["BookingCode"] or booking_code.startswith(f"{hotel['BookingCode']}-"):
            return supplier_mapping.hotel_result_from_supplier({**hotel, "BookingCode": booking_code})
    raise KeyError(booking_code)


def adult(first_name: str, last_name: str, title: str = "Mr") -> Guest:
    return Guest(title=title, first_name=first_name, last_name=last_name, guest_type=GuestType.ADULT)


@pytest.fixture
def make_offer():
    return offer


@pytest.fixture
def context_id() -> str:
    return CONTEXT_ID


@pytest.fixture(autouse=True)
def reset_circuit_breakers():
    supplier_breaker.close()
    yield
    supplier_breaker.close()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(FIXED_NOW)


@pytest.fixture
def id_generator() -> FakeIdGenerator:
    return FakeIdGenerator()


@pytest.fixture
def gateway() -> StubHotelSupplierGateway:
    return StubHotelSupplierGateway()


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def booking_repo() -> InMemoryCommittedBookingRepo:
    return InMemoryCommittedBookingRepo()


@pytest.fixture
def booking_management(gateway, booking_repo) -> BookingManagementService:
    return BookingManagementService(gateway=gateway, repo=booking_repo, timeout_seconds=10.0)


@pytest.fixture
def machine(gateway, session_store, booking_management, clock, id_generator) -> BookingSessionMachine:
    return BookingSessionMachine(
        gateway=gateway,
        store=session_store,
        booking_management=booking_management,
        clock=clock,
        id_generator=id_generator,
    )


@pytest.fixture
def search_use_case(gateway, clock) -> SearchHotelsUseCase:
    return SearchHotelsUseCase(
        gateway=gateway, clock=clock, fallback_catalog=build_fallback_hotels, timeout_seconds=10.0
    )


@pytest.fixture
def bom_criteria() -> SearchCriteria:
    """Mumbai, 2024-03-15 -> 2024-03-18, one room with two adults."""
    return SearchCriteria(
        check_in=date(2024, 3, 15),
        check_out=date(2024, 3, 18),
        guest_nationality="IN",
        rooms=(RoomRequest(adults=2),),
        city_code="BOM",
    )


@pytest.fixture
def two_adults() -> CustomerDetails:
    return CustomerDetails(
        rooms=(RoomGuests(guests=(adult("John", "Doe"), adult("Jane", "Doe", title="Mrs"))),)
    )
