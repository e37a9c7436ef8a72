"""Interface CommittedBookingRepo - bookings the supplier accepted."""

from abc import ABC, abstractmethod

from hotel_booking.domain.entities.committed_booking import CommittedBooking


class CommittedBookingRepo(ABC):
    @abstractmethod
    async def save(self, booking: CommittedBooking) -> None:
        """Insert or replace by confirmation number."""
        raise NotImplementedError

    @abstractmethod
    async def get_by_confirmation_number(self, confirmation_number: str) -> CommittedBooking | None:
        raise NotImplementedError

    @abstractmethod
    async def get_by_booking_reference_id(self, booking_reference_id: str) -> CommittedBooking | None:
        raise NotImplementedError

    @abstractmethod
    async def list_all(self) -> list[CommittedBooking]:
        raise NotImplementedError
