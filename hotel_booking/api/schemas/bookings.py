from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel

from hotel_booking.domain.entities.committed_booking import (
    BookingListResult,
    BookingStatus,
    BookingSummary,
    CancellationOutcome,
    CommittedBooking,
)
from hotel_booking.domain.entities.customer import GuestType, RoomGuests


class GuestSchema(BaseModel):
    title: str
    first_name: str
    last_name: str
    guest_type: GuestType = GuestType.ADULT


class RoomGuestsSchema(BaseModel):
    guests: list[GuestSchema]

    @classmethod
    def from_domain(cls, room: RoomGuests) -> "RoomGuestsSchema":
        return cls(
            guests=[
                GuestSchema(
                    title=guest.title,
                    first_name=guest.first_name,
                    last_name=guest.last_name,
                    guest_type=guest.guest_type,
                )
                for guest in room.guests
            ]
        )


class CommittedBookingResponse(BaseModel):
    confirmation_number: str
    booking_reference_id: str
    booking_id: int
    booking_status: BookingStatus
    hotel_name: str
    check_in: date | None = None
    check_out: date | None = None
    total_fare: Decimal
    currency: str
    rooms: list[RoomGuestsSchema]
    booked_on: datetime | None = None
    voucher_url: str | None = None

    @classmethod
    def from_domain(cls, booking: CommittedBooking) -> "CommittedBookingResponse":
        return cls(
            confirmation_number=booking.confirmation_number,
            booking_reference_id=booking.booking_reference_id,
            booking_id=booking.booking_id,
            booking_status=booking.booking_status,
            hotel_name=booking.hotel_name,
            check_in=booking.check_in,
            check_out=booking.check_out,
            total_fare=booking.total_fare,
            currency=booking.currency,
            rooms=[RoomGuestsSchema.from_domain(room) for room in booking.guest_rooms],
            booked_on=booking.booked_on,
            voucher_url=booking.voucher_url,
        )


class BookingSummaryResponse(BaseModel):
    confirmation_number: str
    booking_reference_id: str
    hotel_name: str
    check_in: date
    check_out: date
    booking_status: BookingStatus
    total_fare: Decimal
    currency: str

    @classmethod
    def from_domain(cls, summary: BookingSummary) -> "BookingSummaryResponse":
        return cls(**vars(summary))


class BookingListResponse(BaseModel):
    bookings: list[BookingSummaryResponse]
    total_count: int

    @classmethod
    def from_domain(cls, result: BookingListResult) -> "BookingListResponse":
        return cls(
            bookings=[BookingSummaryResponse.from_domain(summary) for summary in result.bookings],
            total_count=result.total_count,
        )


class CancellationResponse(BaseModel):
    success: bool
    confirmation_number: str
    cancellation_status: str
    refund_amount: Decimal
    cancellation_charge: Decimal
    message: str

    @classmethod
    def from_domain(cls, outcome: CancellationOutcome) -> "CancellationResponse":
        return cls(**vars(outcome))
