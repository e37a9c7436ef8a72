from datetime import date
from decimal import Decimal

import pytest

from hotel_booking.application.interfaces.hotel_supplier_gateway import SupplierResult
from hotel_booking.domain.entities.committed_booking import BookingStatus, BookingSummary
from hotel_booking.domain.errors import (
    AlreadyCancelledError,
    BookingNotFoundError,
    CancellationFailedError,
    CancellationNotAllowedError,
    InvalidIdentifierError,
    SupplierTimeoutError,
    ValidationError,
)
from hotel_booking.domain.value_objects.stay_period import StayPeriod


# === Booking details ===


async def test_details_by_confirmation_number(booking_management, booking_repo):
    booking = await booking_management.get_booking_details(confirmation_number="CONF-2024-001234")

    assert booking.confirmation_number == "CONF-2024-001234"
    assert booking.booking_status == BookingStatus.CONFIRMED
    assert booking.check_in == date(2024, 3, 15)
    assert booking.check_out == date(2024, 3, 18)
    assert booking.total_fare == Decimal("1020")
    assert [guest.first_name for guest in booking.guest_rooms[0].guests] == ["John", "Jane"]
    assert await booking_repo.get_by_confirmation_number("CONF-2024-001234") == booking


async def test_details_by_booking_reference(booking_management):
    booking = await booking_management.get_booking_details(booking_reference_id="TBO-REF-NC0001")

    assert booking.confirmation_number == "NONCANCELLABLE-001"


async def test_vouchered_booking_reads_as_confirmed(booking_management):
    booking = await booking_management.get_booking_details(confirmation_number="CONF-2024-001300")

    assert booking.booking_status == BookingStatus.CONFIRMED


@pytest.mark.parametrize(
    "identifiers",
    [
        {},
        {"confirmation_number": "  ", "booking_reference_id": ""},
        {"confirmation_number": "CONF-2024-001234", "booking_reference_id": "TBO-REF-NC0001"},
    ],
)
async def test_exactly_one_identifier_is_required(booking_management, gateway, identifiers):
    with pytest.raises(InvalidIdentifierError):
        await booking_management.get_booking_details(**identifiers)

    assert gateway.calls_for("booking_detail") == []


async def test_unknown_booking_is_not_found(booking_management):
    with pytest.raises(BookingNotFoundError):
        await booking_management.get_booking_details(confirmation_number="CONF-NOTFOUND-9999")


async def test_missing_reference_resolves_to_none(booking_management):
    assert await booking_management.find_by_booking_reference("BOOK-NEVER-SENT") is None


# === Bookings by date ===


async def test_bookings_by_date_returns_intersecting_stays(booking_management):
    result = await booking_management.get_bookings_by_date_range("2024-03-01", "2024-04-30")

    confirmation_numbers = {booking.confirmation_number for booking in result.bookings}
    assert confirmation_numbers == {"CONF-2024-001234", "CONF-2024-001235"}
    assert result.total_count == 2


async def test_bookings_by_date_includes_boundary_days(booking_management):
    result = await booking_management.get_bookings_by_date_range("2024-06-07", "2024-06-10")

    confirmation_numbers = {booking.confirmation_number for booking in result.bookings}
    assert confirmation_numbers == {"NONCANCELLABLE-001", "CONF-2024-001300"}


def test_departure_day_belongs_to_the_stay():
    stay = StayPeriod(check_in=date(2024, 6, 5), check_out=date(2024, 6, 7))

    assert stay.intersects(date(2024, 6, 7), date(2024, 6, 10))
    assert not stay.intersects(date(2024, 6, 8), date(2024, 6, 10))


def test_summary_without_usable_dates_has_no_stay():
    summary = BookingSummary(
        confirmation_number="CONF-1",
        booking_reference_id="REF-1",
        hotel_name="Hotel",
        check_in=date(2024, 6, 10),
        check_out=date(2024, 6, 10),
        booking_status=BookingStatus.CONFIRMED,
        total_fare=Decimal("100"),
        currency="USD",
    )

    assert summary.stay is None


async def test_reversed_date_range_is_rejected_before_calling_supplier(booking_management, gateway):
    with pytest.raises(ValidationError):
        await booking_management.get_bookings_by_date_range("2024-06-15", "2024-06-01")

    assert gateway.calls == []


@pytest.mark.parametrize("bad_date", ["2024/06/01", "01-06-2024", "2024-02-30", "2024-6-1", ""])
async def test_malformed_dates_are_rejected(booking_management, gateway, bad_date):
    with pytest.raises(ValidationError):
        await booking_management.get_bookings_by_date_range(bad_date, "2024-06-30")

    assert gateway.calls == []


# === Cancellation ===


async def test_cancel_refunds_all_but_one_night(booking_management, gateway, booking_repo):
    outcome = await booking_management.cancel_booking("CONF-2024-001234")

    assert outcome.success is True
    assert outcome.cancellation_status == "Cancelled"
    assert outcome.refund_amount == Decimal("680")
    assert outcome.cancellation_charge == Decimal("340")
    stored = await booking_repo.get_by_confirmation_number("CONF-2024-001234")
    assert stored.booking_status == BookingStatus.CANCELLED

    with pytest.raises(AlreadyCancelledError):
        await booking_management.cancel_booking("CONF-2024-001234")
    assert len(gateway.calls_for("cancel")) == 1


async def test_cancelled_booking_is_never_sent_again(booking_management, gateway):
    with pytest.raises(AlreadyCancelledError):
        await booking_management.cancel_booking("CONF-2024-001200")

    assert gateway.calls_for("cancel") == []


async def test_non_cancellable_booking_keeps_its_status(booking_management):
    with pytest.raises(CancellationNotAllowedError):
        await booking_management.cancel_booking("NONCANCELLABLE-001")

    booking = await booking_management.get_booking_details(confirmation_number="NONCANCELLABLE-001")
    assert booking.booking_status == BookingStatus.CONFIRMED


async def test_cancel_requires_confirmation_number(booking_management, gateway):
    with pytest.raises(ValidationError):
        await booking_management.cancel_booking("   ")

    assert gateway.calls == []


async def test_cancel_unknown_booking(booking_management, gateway):
    with pytest.raises(BookingNotFoundError):
        await booking_management.cancel_booking("CONF-NOTFOUND-0001")

    assert gateway.calls_for("cancel") == []


async def test_cancel_timeout_is_not_retried(booking_management, gateway):
    gateway.queue_result("cancel", SupplierResult.failure("TIMEOUT", "Request timed out"))

    with pytest.raises(SupplierTimeoutError):
        await booking_management.cancel_booking("CONF-2024-001235")

    assert len(gateway.calls_for("cancel")) == 1
    booking = await booking_management.get_booking_details(confirmation_number="CONF-2024-001235")
    assert booking.booking_status == BookingStatus.CONFIRMED


async def test_pending_cancellation_status_is_a_failure(booking_management, gateway):
    gateway.queue_result(
        "cancel",
        SupplierResult.success(
            {"Status": 1, "ConfirmationNo": "CONF-2024-001235", "CancellationStatus": "Pending"}
        ),
    )

    with pytest.raises(CancellationFailedError):
        await booking_management.cancel_booking("CONF-2024-001235")
