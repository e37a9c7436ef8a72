from datetime import date
from decimal import Decimal

import pytest

from hotel_booking.application import supplier_mapping
from hotel_booking.application.interfaces.hotel_supplier_gateway import SupplierResult
from hotel_booking.domain.entities.committed_booking import BookingStatus
from hotel_booking.domain.entities.customer import ContactInfo, CustomerDetails, Guest, GuestType, RoomGuests
from hotel_booking.domain.errors import (
    AlreadyCancelledError,
    BookingNotFoundError,
    CancellationNotAllowedError,
    InventoryUnavailableError,
    SupplierError,
    SupplierNetworkError,
    SupplierTimeoutError,
    SupplierUnavailableError,
)
from hotel_booking.infrastructure.in_memory import supplier_fixtures


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Confirmed", BookingStatus.CONFIRMED),
        ("VOUCHERED", BookingStatus.CONFIRMED),
        (" pending ", BookingStatus.PENDING),
        ("Canceled", BookingStatus.CANCELLED),
        ("cancelled", BookingStatus.CANCELLED),
        ("Failed", BookingStatus.FAILED),
        ("OnHold", BookingStatus.PENDING),
        (None, BookingStatus.PENDING),
    ],
)
def test_normalize_booking_status(raw, expected):
    assert supplier_mapping.normalize_booking_status(raw) == expected


@pytest.mark.parametrize("value", [None, "", "n/a"])
def test_unparsable_amounts_are_zero(value):
    assert supplier_mapping.to_decimal(value) == Decimal("0")


def test_supplier_dates_accept_timestamps():
    assert supplier_mapping.parse_supplier_date("2024-03-15T00:00:00") == date(2024, 3, 15)
    assert supplier_mapping.parse_supplier_date("15/03/2024") is None


def test_hotel_result_keeps_booking_code_verbatim():
    raw = {**supplier_fixtures.LUXURY_HOTEL, "BookingCode": " LUX5STAR001 "}

    hotel = supplier_mapping.hotel_result_from_supplier(raw)

    assert hotel.booking_code == " LUX5STAR001 "
    assert hotel.price.offered_price == Decimal("340")
    assert hotel.meal_type == "Breakfast Included"
    assert hotel.is_fallback is False


def test_pre_book_without_new_code_keeps_the_original():
    payload = {"Status": 1, "HotelDetails": {"Price": {"OfferedPrice": "199.50", "CurrencyCode": "EUR"}}}

    price_lock = supplier_mapping.price_lock_from_pre_book_response(payload, "BTQ4STAR001")

    assert price_lock.locked_booking_code == "BTQ4STAR001"
    assert price_lock.price.amount == Decimal("199.50")
    assert price_lock.price.currency_code == "EUR"
    assert price_lock.refundable is None
    assert price_lock.supplier_price_changed is False


def test_book_request_shape():
    details = CustomerDetails(
        rooms=(
            RoomGuests(
                guests=(
                    Guest(title="Mr", first_name="John", last_name="Doe"),
                    Guest(title="Master", first_name="Sam", last_name="Doe", guest_type=GuestType.CHILD),
                )
            ),
        )
    )

    request = supplier_mapping.to_book_request(
        locked_booking_code="LUX5STAR001-PREBOOK",
        customer_details=details,
        client_reference_id="idem-1",
        booking_reference_id="BOOK-1",
        total_fare=Decimal("340.00"),
        contact=ContactInfo(email="john@example.com"),
        payment_mode="Limit",
    )

    assert request["BookingCode"] == "LUX5STAR001-PREBOOK"
    assert request["TotalFare"] == 340.0
    assert request["BookingType"] == "API"
    assert request["CustomerDetails"][0]["CustomerNames"][1] == {
        "Title": "Master",
        "FirstName": "Sam",
        "LastName": "Doe",
        "Type": "Child",
    }


def test_committed_booking_from_detail():
    detail = dict(supplier_fixtures.BOOKINGS[0])

    booking = supplier_mapping.committed_booking_from_detail(detail)

    assert booking.confirmation_number == "CONF-2024-001234"
    assert booking.booking_reference_id == "TBO-REF-567890"
    assert booking.check_in == date(2024, 3, 15)
    assert booking.guest_rooms[0].guests[0].guest_type == GuestType.ADULT


@pytest.mark.parametrize(
    "payload, success",
    [
        ({"Status": 1, "CancellationStatus": "Cancelled"}, True),
        ({"Status": 1, "CancellationStatus": "success"}, True),
        ({"Status": 1, "CancellationStatus": "Pending"}, False),
        ({"Status": 0, "CancellationStatus": "Cancelled"}, False),
        ({"Status": 1}, False),
    ],
)
def test_cancellation_success_rules(payload, success):
    outcome = supplier_mapping.cancellation_outcome_from_response(payload, "CONF-1")

    assert outcome.success is success
    assert outcome.confirmation_number == "CONF-1"
    assert outcome.refund_amount == Decimal("0")


@pytest.mark.parametrize(
    "result, expected",
    [
        (SupplierResult.failure("NETWORK_ERROR", "refused"), SupplierNetworkError),
        (SupplierResult.failure("TIMEOUT", "timed out"), SupplierTimeoutError),
        (SupplierResult.failure("CIRCUIT_OPEN", "open"), SupplierUnavailableError),
        (SupplierResult.failure("BOOKING_NOT_FOUND", "missing", 404), BookingNotFoundError),
        (SupplierResult.failure("CANCELLATION_NOT_ALLOWED", "no", 400), CancellationNotAllowedError),
        (SupplierResult.failure("BOOKING_ALREADY_CANCELLED", "done", 400), AlreadyCancelledError),
        (SupplierResult.failure("ROOM_UNAVAILABLE", "gone", 400), InventoryUnavailableError),
        (SupplierResult.failure("WEIRD_CODE", "odd", 400), SupplierError),
    ],
)
def test_map_supplier_error(result, expected):
    assert isinstance(supplier_mapping.map_supplier_error("book", result, identifier="X"), expected)


def test_unmapped_code_is_preserved():
    error = supplier_mapping.map_supplier_error("book", SupplierResult.failure("WEIRD_CODE", "odd", 400))

    assert error.code == "SUPPLIER_ERROR"
    assert error.supplier_code == "WEIRD_CODE"


@pytest.mark.parametrize(
    "result, unavailable",
    [
        (SupplierResult.failure("HTTP_400", "Room no longer available", 400), True),
        (SupplierResult.failure("HTTP_400", "Hotel is SOLD OUT", 400), True),
        (SupplierResult.failure("HTTP_503", "Service Unavailable", 503), False),
        (SupplierResult.failure("TIMEOUT", "unavailable"), False),
        (SupplierResult.failure("HTTP_400", "Invalid booking code", 400), False),
    ],
)
def test_inventory_unavailable_detection(result, unavailable):
    assert supplier_mapping.is_inventory_unavailable(result) is unavailable
