import asyncio
import copy
from collections import defaultdict, deque
from datetime import date
from decimal import Decimal
from typing import Any

from hotel_booking.application.interfaces.hotel_supplier_gateway import HotelSupplierGateway, SupplierResult
from hotel_booking.infrastructure.in_memory import supplier_fixtures

LOCKED_CODE_SUFFIX = "-PREBOOK"


def _not_found(identifier: str) -> SupplierResult:
    body = {"Status": 0, "ErrorCode": "BOOKING_NOT_FOUND", "Message": "Booking not found"}
    return SupplierResult.failure("BOOKING_NOT_FOUND", f"Booking not found: {identifier}", 404, body)


def _rejected(error_code: str, message: str, http_status: int = 400) -> SupplierResult:
    body = {"Status": 0, "ErrorCode": error_code, "Message": message}
    return SupplierResult.failure(error_code, message, http_status, body)


class StubHotelSupplierGateway(HotelSupplierGateway):
    """
    In-memory supplier serving the fixtures in supplier_fixtures.

    Tests can inspect `calls`, script the next answer of an operation with
    queue_result(), or hold an operation open with block().
    Book is idempotent on ClientReferenceId, like the real supplier.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self._queued: dict[str, deque[SupplierResult]] = defaultdict(deque)
        self._gates: dict[str, asyncio.Event] = {}
        self._hotels = {hotel["BookingCode"]: copy.deepcopy(hotel) for hotel in supplier_fixtures.HOTELS}
        self._bookings = {
            booking["ConfirmationNo"]: copy.deepcopy(booking) for booking in supplier_fixtures.BOOKINGS
        }
        self._booked_by_client_reference: dict[str, dict[str, Any]] = {}
        self._stays: dict[str, tuple[str, str]] = {}  # fixture booking code -> searched stay
        self._sequence = 0

    # === Test hooks ===

    def queue_result(self, operation: str, result: SupplierResult) -> None:
        self._queued[operation].append(result)

    def block(self, operation: str) -> asyncio.Event:
        """Calls of `operation` wait until the returned event is set."""
        gate = asyncio.Event()
        self._gates[operation] = gate
        return gate

    def calls_for(self, operation: str) -> list[dict[str, Any]]:
        return [request for name, request in self.calls if name == operation]

    # === Gateway ===

    async def search(self, request: dict[str, Any]) -> SupplierResult:
        queued = await self._enter("search", request)
        if queued:
            return queued
        wanted = [code for code in (request.get("HotelCodes") or "").split(",") if code]
        hotels = [
            copy.deepcopy(hotel)
            for hotel in self._hotels.values()
            if not wanted or hotel["HotelCode"] in wanted
        ]
        for hotel in hotels:
            self._stays[hotel["BookingCode"]] = (request["CheckIn"], request["CheckOut"])
        return SupplierResult.success({"Status": 1, "Hotels": hotels})

    async def hotel_details(self, request: dict[str, Any]) -> SupplierResult:
        queued = await self._enter("hotel_details", request)
        if queued:
            return queued
        codes = [code for code in (request.get("HotelCodes") or "").split(",") if code]
        details = [
            copy.deepcopy(supplier_fixtures.HOTEL_DETAILS[code])
            for code in codes
            if code in supplier_fixtures.HOTEL_DETAILS
        ]
        return SupplierResult.success({"Status": 1, "HotelDetails": details})

    async def pre_book(self, request: dict[str, Any]) -> SupplierResult:
        queued = await self._enter("pre_book", request)
        if queued:
            return queued
        booking_code = request.get("BookingCode", "")
        if "UNAVAILABLE" in booking_code:
            return SupplierResult.failure(
                "HTTP_400", "Room no longer available", 400, {"Status": 0, "Message": "Room no longer available"}
            )
        hotel = self._hotel_for(booking_code)
        if hotel is None:
            return _rejected("INVALID_BOOKING_CODE", f"Unknown booking code {booking_code}")

        price = copy.deepcopy(hotel["Price"])
        price_changed = "PRICECHANGE" in booking_code
        if price_changed:
            price["OfferedPrice"] = supplier_fixtures.CHANGED_OFFERED_PRICE
        return SupplierResult.success(
            {
                "Status": 1,
                "BookingCode": f"{booking_code}{LOCKED_CODE_SUFFIX}",
                "IsPriceChanged": price_changed,
                "IsCancellationPolicyChanged": False,
                "HotelDetails": {"Price": price, "Refundable": hotel["Refundable"]},
                "Message": "Price has changed" if price_changed else "Price confirmed",
            }
        )

    async def book(self, request: dict[str, Any]) -> SupplierResult:
        queued = await self._enter("book", request)
        if queued:
            return queued

        client_reference_id = request.get("ClientReferenceId", "")
        if client_reference_id in self._booked_by_client_reference:
            return SupplierResult.success(copy.deepcopy(self._booked_by_client_reference[client_reference_id]))

        locked_code = request.get("BookingCode", "")
        original_code = locked_code.removesuffix(LOCKED_CODE_SUFFIX)
        hotel = self._hotel_for(original_code)
        if hotel is None or "FAIL" in locked_code:
            return _rejected("BOOKING_FAILED", "Booking failed. Please try again.")

        self._sequence += 1
        check_in, check_out = self._stays.get(hotel["BookingCode"], (None, None))
        detail = {
            "ConfirmationNo": f"CONF-STUB-{self._sequence:06d}",
            "BookingRefNo": request.get("BookingReferenceId", ""),
            "BookingId": 900000 + self._sequence,
            "BookingStatus": "Confirmed",
            "HotelName": hotel["HotelName"],
            "CheckInDate": check_in,
            "CheckOutDate": check_out,
            "TotalFare": request.get("TotalFare"),
            "CurrencyCode": hotel["Price"]["CurrencyCode"],
            "GuestDetails": copy.deepcopy(request.get("CustomerDetails") or []),
            "BookedOn": None,
        }
        self._bookings[detail["ConfirmationNo"]] = detail
        response = {
            "Status": 1,
            "ConfirmationNo": detail["ConfirmationNo"],
            "BookingRefNo": detail["BookingRefNo"],
            "BookingId": detail["BookingId"],
            "Message": "Booking confirmed",
        }
        self._booked_by_client_reference[client_reference_id] = response

        if "TIMEOUT" in locked_code:
            # Booked on the supplier side, but the answer never arrives
            return SupplierResult.failure("TIMEOUT", "Request timed out")
        return SupplierResult.success(copy.deepcopy(response))

    async def booking_detail(self, request: dict[str, Any]) -> SupplierResult:
        queued = await self._enter("booking_detail", request)
        if queued:
            return queued
        identifier = request.get("ConfirmationNo") or request.get("BookingRefNo") or ""
        booking = self._find_booking(request.get("ConfirmationNo"), request.get("BookingRefNo"))
        if booking is None or "NOTFOUND" in identifier:
            return _not_found(identifier)
        return SupplierResult.success({"Status": 1, "BookingDetails": copy.deepcopy(booking)})

    async def bookings_by_date(self, request: dict[str, Any]) -> SupplierResult:
        queued = await self._enter("bookings_by_date", request)
        if queued:
            return queued
        start = date.fromisoformat(request["FromDate"])
        end = date.fromisoformat(request["ToDate"])
        summaries = []
        for booking in self._bookings.values():
            if not booking.get("CheckInDate") or not booking.get("CheckOutDate"):
                continue
            check_in = date.fromisoformat(booking["CheckInDate"])
            check_out = date.fromisoformat(booking["CheckOutDate"])
            if check_in <= end and start <= check_out:
                summaries.append(
                    {
                        key: booking.get(key)
                        for key in (
                            "ConfirmationNo",
                            "BookingRefNo",
                            "HotelName",
                            "CheckInDate",
                            "CheckOutDate",
                            "BookingStatus",
                            "TotalFare",
                            "CurrencyCode",
                        )
                    }
                )
        return SupplierResult.success({"Status": 1, "Bookings": summaries})

    async def cancel(self, request: dict[str, Any]) -> SupplierResult:
        queued = await self._enter("cancel", request)
        if queued:
            return queued
        confirmation_number = request.get("ConfirmationNo", "")
        booking = self._bookings.get(confirmation_number)
        if booking is None or "NOTFOUND" in confirmation_number:
            return _not_found(confirmation_number)
        if "NONCANCELLABLE" in confirmation_number:
            return _rejected("CANCELLATION_NOT_ALLOWED", "This booking cannot be cancelled")
        if str(booking.get("BookingStatus", "")).lower() == "cancelled":
            return _rejected("BOOKING_ALREADY_CANCELLED", "Booking is already cancelled")

        # One night is charged, the rest refunded
        fare = Decimal(str(booking.get("TotalFare") or 0))
        nights = 1
        if booking.get("CheckInDate") and booking.get("CheckOutDate"):
            stay = date.fromisoformat(booking["CheckOutDate"]) - date.fromisoformat(booking["CheckInDate"])
            nights = max(stay.days, 1)
        charge = (fare / nights).quantize(Decimal("0.01"))
        booking["BookingStatus"] = "Cancelled"
        return SupplierResult.success(
            {
                "Status": 1,
                "ConfirmationNo": confirmation_number,
                "CancellationStatus": "Cancelled",
                "RefundAmount": str(fare - charge),
                "CancellationCharge": str(charge),
                "Message": "Booking cancelled successfully. Refund will be processed within 7-10 business days.",
            }
        )

    # === Helpers ===

    async def _enter(self, operation: str, request: dict[str, Any]) -> SupplierResult | None:
        """Record the call, wait on a gate if any, then pop a queued result."""
        self.calls.append((operation, copy.deepcopy(request)))
        gate = self._gates.get(operation)
        if gate is not None:
            await gate.wait()
        if self._queued[operation]:
            return self._queued[operation].popleft()
        return None

    def _hotel_for(self, booking_code: str) -> dict[str, Any] | None:
        if booking_code in self._hotels:
            return self._hotels[booking_code]
        for code, hotel in self._hotels.items():
            if booking_code.startswith(f"{code}-"):
                return hotel
        return None

    def _find_booking(self, confirmation_number: str | None, booking_reference_id: str | None):
        if confirmation_number:
            return self._bookings.get(confirmation_number)
        for booking in self._bookings.values():
            if booking.get("BookingRefNo") == booking_reference_id:
                return booking
        return None
