"""Booking Management - retrieval, listing and cancellation of committed bookings."""

import logging
import re
from datetime import date

from hotel_booking.application import supplier_mapping
from hotel_booking.application.interfaces.committed_booking_repo import CommittedBookingRepo
from hotel_booking.application.interfaces.hotel_supplier_gateway import HotelSupplierGateway, SupplierResult
from hotel_booking.domain.entities.committed_booking import (
    BookingListResult,
    CancellationOutcome,
    CommittedBooking,
)
from hotel_booking.domain.errors import (
    AlreadyCancelledError,
    BookingNotFoundError,
    CancellationFailedError,
    CancellationNotAllowedError,
    DomainError,
    InvalidIdentifierError,
    SupplierError,
    ValidationError,
)

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_NOT_ALLOWED_MARKERS = ("cannot be cancelled", "not allowed", "non-cancellable", "non cancellable")
_ALREADY_CANCELLED_MARKERS = ("already cancelled", "already canceled")


def parse_strict_date(value: str | date, field: str) -> date:
    """Accept a date or a strict YYYY-MM-DD string naming a real calendar day."""
    if isinstance(value, date):
        return value
    text = (value or "").strip()
    if not DATE_PATTERN.match(text):
        raise ValidationError(field, "Invalid date format. Expected YYYY-MM-DD")
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValidationError(field, f"Invalid calendar date: {text}")


class BookingManagementService:
    """
    Operations on bookings the supplier already accepted.

    Independent of any booking session: a cancellation never looks at or
    touches in-flight sessions.
    """

    def __init__(
        self,
        gateway: HotelSupplierGateway,
        repo: CommittedBookingRepo,
        timeout_seconds: float | None = None,
    ):
        self._gateway = gateway
        self._repo = repo
        self._timeout_seconds = timeout_seconds

    async def record(self, booking: CommittedBooking) -> None:
        """Hand-off point from the session machine after a successful commit."""
        await self._repo.save(booking)
        logger.info(
            "Committed booking recorded",
            extra={
                "confirmation_number": booking.confirmation_number,
                "booking_reference_id": booking.booking_reference_id,
            },
        )

    async def get_booking_details(
        self,
        confirmation_number: str | None = None,
        booking_reference_id: str | None = None,
    ) -> CommittedBooking:
        """
        Retrieve one booking by exactly one identifier.

        Raises:
            InvalidIdentifierError: none or both identifiers given.
            BookingNotFoundError: the supplier has no such booking.
        """
        confirmation_number = (confirmation_number or "").strip() or None
        booking_reference_id = (booking_reference_id or "").strip() or None
        if bool(confirmation_number) == bool(booking_reference_id):
            raise InvalidIdentifierError(
                "Exactly one of confirmation number or booking reference ID must be provided"
            )
        identifier = confirmation_number or booking_reference_id

        result = await self._gateway.booking_detail(
            supplier_mapping.to_booking_detail_request(
                confirmation_number=confirmation_number,
                booking_reference_id=booking_reference_id,
            )
        )
        if not result.ok:
            raise self._lookup_error(result, identifier)

        booking = supplier_mapping.committed_booking_from_detail_response(result.payload or {})
        if booking is None:
            raise BookingNotFoundError(identifier, supplier_payload=result.payload)
        if confirmation_number and booking.confirmation_number != confirmation_number:
            raise SupplierError(
                "booking_detail",
                supplier_code="CONFIRMATION_MISMATCH",
                supplier_message=f"Requested {confirmation_number}, got {booking.confirmation_number}",
                supplier_payload=result.payload,
            )

        await self._repo.save(booking)
        return booking

    async def find_by_booking_reference(self, booking_reference_id: str) -> CommittedBooking | None:
        """Like get_booking_details, but a missing booking is None instead of an error."""
        try:
            return await self.get_booking_details(booking_reference_id=booking_reference_id)
        except BookingNotFoundError:
            return None

    async def get_bookings_by_date_range(self, from_date: str | date, to_date: str | date) -> BookingListResult:
        """
        List bookings whose stay intersects [from_date, to_date].

        Dates are validated before any supplier call.
        """
        start = parse_strict_date(from_date, "from_date")
        end = parse_strict_date(to_date, "to_date")
        if start > end:
            raise ValidationError("from_date", "From date must be before or equal to to date")

        result = await self._gateway.bookings_by_date(supplier_mapping.to_bookings_by_date_request(start, end))
        if not result.ok:
            logger.error(
                "Booking list lookup failed",
                extra={"from_date": start.isoformat(), "to_date": end.isoformat(), "error_code": result.error_code},
            )
            raise supplier_mapping.map_supplier_error(
                "bookings_by_date", result, timeout_seconds=self._timeout_seconds
            )

        summaries = []
        for summary in supplier_mapping.booking_summaries_from_response(result.payload):
            stay = summary.stay
            if stay is not None and stay.intersects(start, end):
                summaries.append(summary)
        return BookingListResult(bookings=tuple(summaries))

    async def cancel_booking(self, confirmation_number: str) -> CancellationOutcome:
        """
        Cancel a committed booking.

        The current status is checked first, so a cancelled booking is never
        sent to the supplier again. The cancel call itself is never retried.
        """
        confirmation_number = (confirmation_number or "").strip()
        if not confirmation_number:
            raise ValidationError("confirmation_number", "Confirmation number is required for cancellation")

        booking = await self.get_booking_details(confirmation_number=confirmation_number)
        booking.ensure_cancellable()

        result = await self._gateway.cancel(supplier_mapping.to_cancel_request(confirmation_number))
        if not result.ok:
            error = self._cancel_error(result, confirmation_number)
            logger.warning(
                "Booking cancellation rejected",
                extra={
                    "confirmation_number": confirmation_number,
                    "error_code": error.code,
                    "supplier_code": result.error_code,
                },
            )
            raise error

        outcome = supplier_mapping.cancellation_outcome_from_response(result.payload or {}, confirmation_number)
        if not outcome.success:
            raise CancellationFailedError(
                confirmation_number,
                reason=outcome.message or f"cancellation status {outcome.cancellation_status!r}",
                supplier_payload=result.payload,
            )

        await self._repo.save(booking.mark_cancelled())
        logger.info(
            "Booking cancelled",
            extra={
                "confirmation_number": confirmation_number,
                "refund_amount": str(outcome.refund_amount),
                "cancellation_charge": str(outcome.cancellation_charge),
            },
        )
        return outcome

    def _lookup_error(self, result: SupplierResult, identifier: str) -> DomainError:
        if result.http_status == 404:
            return BookingNotFoundError(identifier, supplier_payload=result.payload)
        return supplier_mapping.map_supplier_error(
            "booking_detail", result, identifier=identifier, timeout_seconds=self._timeout_seconds
        )

    def _cancel_error(self, result: SupplierResult, confirmation_number: str) -> DomainError:
        message = (result.error_message or "").lower()
        if result.error_code == supplier_mapping.CANCELLATION_NOT_ALLOWED or any(
            marker in message for marker in _NOT_ALLOWED_MARKERS
        ):
            return CancellationNotAllowedError(
                confirmation_number, reason=result.error_message, supplier_payload=result.payload
            )
        if result.error_code == supplier_mapping.BOOKING_ALREADY_CANCELLED or any(
            marker in message for marker in _ALREADY_CANCELLED_MARKERS
        ):
            return AlreadyCancelledError(confirmation_number, supplier_payload=result.payload)
        if result.http_status == 404 or result.error_code == supplier_mapping.BOOKING_NOT_FOUND:
            return BookingNotFoundError(confirmation_number, supplier_payload=result.payload)
        if supplier_mapping.is_transport_failure(result):
            return supplier_mapping.map_supplier_error(
                "cancel", result, identifier=confirmation_number, timeout_seconds=self._timeout_seconds
            )
        return CancellationFailedError(
            confirmation_number, reason=result.error_message, supplier_payload=result.payload
        )
