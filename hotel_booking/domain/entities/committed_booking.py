"""Committed bookings and cancellation outcomes."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from hotel_booking.domain.entities.customer import RoomGuests
from hotel_booking.domain.errors import AlreadyCancelledError, CancellationNotAllowedError
from hotel_booking.domain.value_objects.money import Money
from hotel_booking.domain.value_objects.stay_period import StayPeriod


class BookingStatus(str, Enum):
    """Closed set of booking statuses exposed by the core."""

    CONFIRMED = "Confirmed"
    PENDING = "Pending"
    CANCELLED = "Cancelled"
    FAILED = "Failed"


CANCELLABLE_STATUSES = (BookingStatus.CONFIRMED, BookingStatus.PENDING)


@dataclass(frozen=True)
class CommittedBooking:
    """
    Durable record of a booking the supplier accepted.

    Only the status may change afterwards, and only to Cancelled.
    """

    confirmation_number: str
    booking_reference_id: str
    booking_id: int
    booking_status: BookingStatus
    hotel_name: str
    check_in: date
    check_out: date
    total_fare: Decimal
    currency: str
    guest_rooms: tuple[RoomGuests, ...] = field(default_factory=tuple)
    booked_on: datetime | None = None
    voucher_url: str | None = None

    @property
    def stay(self) -> StayPeriod:
        return StayPeriod(check_in=self.check_in, check_out=self.check_out)

    @property
    def total(self) -> Money:
        return Money(amount=self.total_fare, currency_code=self.currency)

    @property
    def can_be_cancelled(self) -> bool:
        return self.booking_status in CANCELLABLE_STATUSES

    def ensure_cancellable(self) -> None:
        if self.booking_status == BookingStatus.CANCELLED:
            raise AlreadyCancelledError(self.confirmation_number)
        if not self.can_be_cancelled:
            raise CancellationNotAllowedError(
                self.confirmation_number, reason=f"status is {self.booking_status.value}"
            )

    def mark_cancelled(self) -> "CommittedBooking":
        self.ensure_cancellable()
        return replace(self, booking_status=BookingStatus.CANCELLED)

    def summary(self) -> "BookingSummary":
        return BookingSummary(
            confirmation_number=self.confirmation_number,
            booking_reference_id=self.booking_reference_id,
            hotel_name=self.hotel_name,
            check_in=self.check_in,
            check_out=self.check_out,
            booking_status=self.booking_status,
            total_fare=self.total_fare,
            currency=self.currency,
        )


@dataclass(frozen=True)
class BookingSummary:
    """Committed booking without the guest roster."""

    confirmation_number: str
    booking_reference_id: str
    hotel_name: str
    check_in: date
    check_out: date
    booking_status: BookingStatus
    total_fare: Decimal
    currency: str

    @property
    def stay(self) -> StayPeriod | None:
        """None when the supplier sent no usable stay window."""
        if not self.check_in or not self.check_out or self.check_in >= self.check_out:
            return None
        return StayPeriod(check_in=self.check_in, check_out=self.check_out)


@dataclass(frozen=True)
class BookingListResult:
    bookings: tuple[BookingSummary, ...]

    @property
    def total_count(self) -> int:
        return len(self.bookings)


@dataclass(frozen=True)
class CancellationOutcome:
    success: bool
    confirmation_number: str
    cancellation_status: str
    refund_amount: Decimal
    cancellation_charge: Decimal
    message: str
