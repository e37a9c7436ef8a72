from hotel_booking.application.interfaces.committed_booking_repo import CommittedBookingRepo
from hotel_booking.domain.entities.committed_booking import CommittedBooking


class InMemoryCommittedBookingRepo(CommittedBookingRepo):
    def __init__(self) -> None:
        self.bookings: dict[str, CommittedBooking] = {}

    async def save(self, booking: CommittedBooking) -> None:
        self.bookings[booking.confirmation_number] = booking

    async def get_by_confirmation_number(self, confirmation_number: str) -> CommittedBooking | None:
        return self.bookings.get(confirmation_number)

    async def get_by_booking_reference_id(self, booking_reference_id: str) -> CommittedBooking | None:
        for booking in self.bookings.values():
            if booking.booking_reference_id == booking_reference_id:
                return booking
        return None

    async def list_all(self) -> list[CommittedBooking]:
        return list(self.bookings.values())
