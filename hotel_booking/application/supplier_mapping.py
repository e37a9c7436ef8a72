"""
Boundary between the supplier's wire shape and the domain types.

Every supplier payload is PascalCase JSON. This module is the only place
that reads or writes that shape: use cases hand it domain objects and get
request bodies back, and hand it SupplierResult payloads and get domain
objects back. All functions are pure.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from hotel_booking.application.interfaces.hotel_supplier_gateway import SupplierResult
from hotel_booking.domain.entities.committed_booking import (
    BookingStatus,
    BookingSummary,
    CancellationOutcome,
    CommittedBooking,
)
from hotel_booking.domain.entities.customer import (
    ContactInfo,
    CustomerDetails,
    Guest,
    GuestType,
    RoomGuests,
)
from hotel_booking.domain.entities.hotel import HotelDetails, HotelPrice, HotelResult
from hotel_booking.domain.entities.price_lock import PriceLock
from hotel_booking.domain.entities.search_criteria import SearchCriteria
from hotel_booking.domain.errors import (
    AlreadyCancelledError,
    BookingNotFoundError,
    CancellationNotAllowedError,
    DomainError,
    InvalidIdentifierError,
    InventoryUnavailableError,
    SupplierError,
    SupplierNetworkError,
    SupplierTimeoutError,
    SupplierUnavailableError,
)
from hotel_booking.domain.value_objects.money import Money

# Supplier response status codes
API_STATUS_SUCCESS = 1

DEFAULT_RESPONSE_TIME = 23
BOOKING_TYPE = "API"

# Gateway-level error codes
NETWORK_ERROR = "NETWORK_ERROR"
TIMEOUT = "TIMEOUT"
CIRCUIT_OPEN = "CIRCUIT_OPEN"
API_ERROR = "API_ERROR"

# Supplier business error codes
BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
INVALID_CONFIRMATION_NUMBER = "INVALID_CONFIRMATION_NUMBER"
CANCELLATION_NOT_ALLOWED = "CANCELLATION_NOT_ALLOWED"
BOOKING_ALREADY_CANCELLED = "BOOKING_ALREADY_CANCELLED"
ROOM_UNAVAILABLE = "ROOM_UNAVAILABLE"

UNAVAILABLE_MARKERS = ("not available", "sold out", "no longer available", "unavailable")

_STATUS_MAP = {
    "confirmed": BookingStatus.CONFIRMED,
    "vouchered": BookingStatus.CONFIRMED,
    "pending": BookingStatus.PENDING,
    "cancelled": BookingStatus.CANCELLED,
    "canceled": BookingStatus.CANCELLED,
    "failed": BookingStatus.FAILED,
}

SUCCESSFUL_CANCELLATION_STATUSES = ("success", "cancelled")


# === Scalar helpers ===


def to_decimal(value: Any) -> Decimal:
    """Supplier amount to Decimal; missing or unparsable values count as zero."""
    if value is None or value == "":
        return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return Decimal("0")


def parse_supplier_date(value: Any) -> date | None:
    """Accepts 'YYYY-MM-DD' and full ISO timestamps."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def parse_supplier_datetime(value: Any) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).replace("Z", "+00:00")
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def normalize_booking_status(raw_status: str | None) -> BookingStatus:
    """
    Map a supplier status onto the closed local set.

    Case-insensitive; 'Vouchered' means Confirmed. Anything unknown is
    treated as Pending so it stays visible and cancellable.
    """
    if not raw_status:
        return BookingStatus.PENDING
    return _STATUS_MAP.get(str(raw_status).strip().lower(), BookingStatus.PENDING)


# === Search ===


def to_search_request(criteria: SearchCriteria) -> dict[str, Any]:
    request: dict[str, Any] = {
        "CheckIn": criteria.check_in.isoformat(),
        "CheckOut": criteria.check_out.isoformat(),
        "GuestNationality": criteria.guest_nationality,
        "PaxRooms": [
            {
                "Adults": room.adults,
                "Children": room.children,
                "ChildrenAges": list(room.children_ages),
            }
            for room in criteria.rooms
        ],
        "ResponseTime": DEFAULT_RESPONSE_TIME,
        "IsDetailedResponse": True,
    }
    if criteria.hotel_codes:
        request["HotelCodes"] = ",".join(criteria.hotel_codes)
    if criteria.city_code:
        request["CityCode"] = criteria.city_code
    return request


def hotel_price_from_supplier(price: dict[str, Any]) -> HotelPrice:
    return HotelPrice(
        currency=price.get("CurrencyCode") or "USD",
        offered_price=to_decimal(price.get("OfferedPrice")),
        published_price=to_decimal(price.get("PublishedPrice")),
        room_price=to_decimal(price.get("RoomPrice")),
        tax=to_decimal(price.get("Tax")),
        extra_guest_charge=to_decimal(price.get("ExtraGuestCharge")),
        child_charge=to_decimal(price.get("ChildCharge")),
        other_charges=to_decimal(price.get("OtherCharges")),
        discount=to_decimal(price.get("Discount")),
        agent_commission=to_decimal(price.get("AgentCommission")),
        agent_mark_up=to_decimal(price.get("AgentMarkUp")),
    )


def hotel_result_from_supplier(hotel: dict[str, Any], is_fallback: bool = False) -> HotelResult:
    """booking_code is copied verbatim; it is never trimmed or re-cased."""
    return HotelResult(
        booking_code=hotel["BookingCode"],
        hotel_code=str(hotel.get("HotelCode", "")),
        hotel_name=hotel.get("HotelName", ""),
        star_rating=int(hotel.get("StarRating") or 0),
        price=hotel_price_from_supplier(hotel.get("Price") or {}),
        refundable=bool(hotel.get("Refundable", False)),
        address=hotel.get("HotelAddress", ""),
        contact_number=hotel.get("HotelContactNo", ""),
        city_name=hotel.get("CityName", ""),
        country_name=hotel.get("CountryName", ""),
        meal_type=hotel.get("MealType", ""),
        room_type=hotel.get("RoomType", ""),
        available_rooms=int(hotel.get("AvailableRooms") or 0),
        amenities=tuple(hotel.get("Amenities") or ()),
        hotel_picture=hotel.get("HotelPicture", ""),
        hotel_images=tuple(hotel.get("HotelImages") or ()),
        cancellation_policy=hotel.get("CancellationPolicy"),
        is_fallback=is_fallback,
    )


def hotels_from_search_response(payload: dict[str, Any] | None, is_fallback: bool = False) -> list[HotelResult]:
    hotels = (payload or {}).get("Hotels") or []
    return [hotel_result_from_supplier(hotel, is_fallback=is_fallback) for hotel in hotels]


# === Hotel details ===


def to_hotel_details_request(hotel_codes: list[str] | tuple[str, ...], language: str = "en") -> dict[str, Any]:
    return {"HotelCodes": ",".join(hotel_codes), "Language": language}


def hotel_details_from_supplier(detail: dict[str, Any]) -> HotelDetails:
    policy = detail.get("HotelPolicy") or {}
    location = detail.get("Map") or {}
    return HotelDetails(
        hotel_code=str(detail.get("HotelCode", "")),
        hotel_name=detail.get("HotelName", ""),
        star_rating=int(detail.get("StarRating") or 0),
        description=detail.get("Description", ""),
        facilities=tuple(detail.get("HotelFacilities") or ()),
        attractions=tuple(
            (attraction.get("Key", ""), attraction.get("Value", ""))
            for attraction in detail.get("Attractions") or ()
        ),
        check_in_time=policy.get("CheckInTime", ""),
        check_out_time=policy.get("CheckOutTime", ""),
        cancellation_policy=policy.get("CancellationPolicy", ""),
        images=tuple(detail.get("Images") or ()),
        address=detail.get("Address", ""),
        pin_code=detail.get("PinCode", ""),
        city_name=detail.get("CityName", ""),
        country_name=detail.get("CountryName", ""),
        phone_number=detail.get("PhoneNumber", ""),
        fax_number=detail.get("FaxNumber", ""),
        latitude=location.get("Latitude"),
        longitude=location.get("Longitude"),
    )


def hotel_details_from_response(payload: dict[str, Any] | None) -> list[HotelDetails]:
    details = (payload or {}).get("HotelDetails") or []
    return [hotel_details_from_supplier(detail) for detail in details]


# === Pre-book ===


def to_pre_book_request(booking_code: str, payment_mode: str) -> dict[str, Any]:
    return {"BookingCode": booking_code, "PaymentMode": payment_mode}


def price_lock_from_pre_book_response(payload: dict[str, Any], original_booking_code: str) -> PriceLock:
    """
    The locked code is whatever the supplier returned; when it omits one the
    original code stays valid.
    """
    hotel_details = payload.get("HotelDetails") or {}
    price = hotel_details.get("Price") or {}
    return PriceLock(
        locked_booking_code=payload.get("BookingCode") or original_booking_code,
        price=Money(amount=to_decimal(price.get("OfferedPrice")), currency_code=price.get("CurrencyCode") or "USD"),
        published_price=to_decimal(price.get("PublishedPrice")),
        refundable=hotel_details.get("Refundable"),
        cancellation_policy=hotel_details.get("CancellationPolicy"),
        supplier_price_changed=bool(payload.get("IsPriceChanged", False)),
        supplier_policy_changed=bool(payload.get("IsCancellationPolicyChanged", False)),
        message=payload.get("Message"),
    )


# === Book ===


def customer_details_to_supplier(customer_details: CustomerDetails) -> list[dict[str, Any]]:
    return [
        {
            "CustomerNames": [
                {
                    "Title": guest.title,
                    "FirstName": guest.first_name,
                    "LastName": guest.last_name,
                    "Type": guest.guest_type.value,
                }
                for guest in room.guests
            ]
        }
        for room in customer_details.rooms
    ]


def guest_rooms_from_supplier(rooms: list[dict[str, Any]] | None) -> tuple[RoomGuests, ...]:
    result = []
    for room in rooms or ():
        guests = []
        for customer in room.get("CustomerNames") or ():
            raw_type = str(customer.get("Type") or GuestType.ADULT.value).capitalize()
            guest_type = GuestType.CHILD if raw_type == GuestType.CHILD.value else GuestType.ADULT
            guests.append(
                Guest(
                    title=customer.get("Title", ""),
                    first_name=customer.get("FirstName", ""),
                    last_name=customer.get("LastName", ""),
                    guest_type=guest_type,
                )
            )
        result.append(RoomGuests(guests=tuple(guests)))
    return tuple(result)


def to_book_request(
    locked_booking_code: str,
    customer_details: CustomerDetails,
    client_reference_id: str,
    booking_reference_id: str,
    total_fare: Decimal,
    contact: ContactInfo,
    payment_mode: str,
) -> dict[str, Any]:
    return {
        "BookingCode": locked_booking_code,
        "CustomerDetails": customer_details_to_supplier(customer_details),
        "ClientReferenceId": client_reference_id,
        "BookingReferenceId": booking_reference_id,
        "TotalFare": float(total_fare),
        "EmailId": contact.email,
        "PhoneNumber": contact.phone_number,
        "BookingType": BOOKING_TYPE,
        "PaymentMode": payment_mode,
    }


def committed_booking_from_book_response(
    payload: dict[str, Any],
    booking_reference_id: str,
    check_in: date,
    check_out: date,
    hotel_name: str,
    total_fare: Money,
    customer_details: CustomerDetails,
    booked_on: datetime,
) -> CommittedBooking:
    """
    Build the committed record from a book response.

    The book response only echoes part of the booking; missing fields fall
    back to what the session sent.
    """
    hotel_details = payload.get("HotelDetails") or {}
    fare = hotel_details.get("TotalFare")
    return CommittedBooking(
        confirmation_number=payload["ConfirmationNo"],
        booking_reference_id=payload.get("BookingRefNo") or booking_reference_id,
        booking_id=int(payload.get("BookingId") or 0),
        booking_status=BookingStatus.CONFIRMED,
        hotel_name=hotel_details.get("HotelName") or hotel_name,
        check_in=parse_supplier_date(hotel_details.get("CheckInDate")) or check_in,
        check_out=parse_supplier_date(hotel_details.get("CheckOutDate")) or check_out,
        total_fare=to_decimal(fare) if fare is not None else total_fare.amount,
        currency=hotel_details.get("CurrencyCode") or total_fare.currency_code,
        guest_rooms=customer_details.rooms,
        booked_on=booked_on,
        voucher_url=payload.get("VoucherUrl"),
    )


# === Booking management ===


def to_booking_detail_request(
    confirmation_number: str | None = None, booking_reference_id: str | None = None
) -> dict[str, Any]:
    if confirmation_number:
        return {"ConfirmationNo": confirmation_number}
    return {"BookingRefNo": booking_reference_id}


def committed_booking_from_detail(detail: dict[str, Any]) -> CommittedBooking:
    return CommittedBooking(
        confirmation_number=detail["ConfirmationNo"],
        booking_reference_id=detail.get("BookingRefNo", ""),
        booking_id=int(detail.get("BookingId") or 0),
        booking_status=normalize_booking_status(detail.get("BookingStatus")),
        hotel_name=detail.get("HotelName", ""),
        check_in=parse_supplier_date(detail.get("CheckInDate")),
        check_out=parse_supplier_date(detail.get("CheckOutDate")),
        total_fare=to_decimal(detail.get("TotalFare")),
        currency=detail.get("CurrencyCode") or "USD",
        guest_rooms=guest_rooms_from_supplier(detail.get("GuestDetails")),
        booked_on=parse_supplier_datetime(detail.get("BookedOn")),
        voucher_url=detail.get("VoucherUrl"),
    )


def committed_booking_from_detail_response(payload: dict[str, Any]) -> CommittedBooking | None:
    detail = payload.get("BookingDetails")
    if not detail or not detail.get("ConfirmationNo"):
        return None
    return committed_booking_from_detail(detail)


def to_bookings_by_date_request(from_date: date, to_date: date) -> dict[str, Any]:
    return {"FromDate": from_date.isoformat(), "ToDate": to_date.isoformat()}


def booking_summary_from_supplier(summary: dict[str, Any]) -> BookingSummary:
    return BookingSummary(
        confirmation_number=summary["ConfirmationNo"],
        booking_reference_id=summary.get("BookingRefNo", ""),
        hotel_name=summary.get("HotelName", ""),
        check_in=parse_supplier_date(summary.get("CheckInDate")),
        check_out=parse_supplier_date(summary.get("CheckOutDate")),
        booking_status=normalize_booking_status(summary.get("BookingStatus")),
        total_fare=to_decimal(summary.get("TotalFare")),
        currency=summary.get("CurrencyCode") or "USD",
    )


def booking_summaries_from_response(payload: dict[str, Any] | None) -> list[BookingSummary]:
    return [booking_summary_from_supplier(summary) for summary in (payload or {}).get("Bookings") or []]


def to_cancel_request(confirmation_number: str) -> dict[str, Any]:
    return {"ConfirmationNo": confirmation_number}


def cancellation_outcome_from_response(payload: dict[str, Any], confirmation_number: str) -> CancellationOutcome:
    """
    Successful only when the supplier status is 1 and the cancellation
    status reads success or cancelled. Missing amounts count as zero.
    """
    cancellation_status = str(payload.get("CancellationStatus") or "")
    success = (
        payload.get("Status") == API_STATUS_SUCCESS
        and cancellation_status.strip().lower() in SUCCESSFUL_CANCELLATION_STATUSES
    )
    return CancellationOutcome(
        success=success,
        confirmation_number=payload.get("ConfirmationNo") or confirmation_number,
        cancellation_status=cancellation_status,
        refund_amount=to_decimal(payload.get("RefundAmount")),
        cancellation_charge=to_decimal(payload.get("CancellationCharge")),
        message=payload.get("Message") or "",
    )


# === Errors ===


def is_transport_failure(result: SupplierResult) -> bool:
    return result.error_code in (NETWORK_ERROR, TIMEOUT, CIRCUIT_OPEN)


def is_inventory_unavailable(result: SupplierResult) -> bool:
    """Supplier rejection (never a transport failure) saying the room is gone."""
    if result.error_code == ROOM_UNAVAILABLE:
        return True
    if is_transport_failure(result) or (result.http_status or 0) >= 500:
        return False
    message = (result.error_message or "").lower()
    return any(marker in message for marker in UNAVAILABLE_MARKERS)


def map_supplier_error(
    operation: str,
    result: SupplierResult,
    identifier: str | None = None,
    timeout_seconds: float | None = None,
) -> DomainError:
    """
    Translate a FAILED SupplierResult into the local error taxonomy.

    Codes without a local mapping become SupplierError with the raw code
    preserved.
    """
    code = result.error_code
    message = result.error_message
    if code == NETWORK_ERROR:
        return SupplierNetworkError(operation, reason=message)
    if code == TIMEOUT:
        return SupplierTimeoutError(operation, timeout_seconds=timeout_seconds)
    if code == CIRCUIT_OPEN:
        return SupplierUnavailableError(operation)
    if code == BOOKING_NOT_FOUND:
        return BookingNotFoundError(identifier or "", supplier_payload=result.payload)
    if code == INVALID_CONFIRMATION_NUMBER:
        return InvalidIdentifierError(message or f"Invalid identifier: {identifier}", supplier_payload=result.payload)
    if code == CANCELLATION_NOT_ALLOWED:
        return CancellationNotAllowedError(identifier or "", reason=message, supplier_payload=result.payload)
    if code == BOOKING_ALREADY_CANCELLED:
        return AlreadyCancelledError(identifier or "", supplier_payload=result.payload)
    if code == ROOM_UNAVAILABLE:
        return InventoryUnavailableError(identifier or "", supplier_message=message, supplier_payload=result.payload)
    return SupplierError(
        operation,
        supplier_code=code,
        supplier_message=message,
        http_status=result.http_status,
        supplier_payload=result.payload,
    )
