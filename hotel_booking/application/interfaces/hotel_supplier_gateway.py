"""Interface HotelSupplierGateway - port to the external hotel supplier API."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

SUCCESS = "SUCCESS"
FAILED = "FAILED"


@dataclass
class SupplierResult:
    """
    Raw outcome of one supplier call.

    The payload keeps the supplier's own (PascalCase) shape. Only
    application.supplier_mapping turns it into domain types.
    """

    status: str  # SUCCESS, FAILED
    payload: dict[str, Any] | None = None
    error_code: str | None = None
    error_message: str | None = None
    http_status: int | None = None

    @property
    def ok(self) -> bool:
        return self.status == SUCCESS

    @classmethod
    def success(cls, payload: dict[str, Any], http_status: int | None = 200) -> "SupplierResult":
        return cls(status=SUCCESS, payload=payload, http_status=http_status)

    @classmethod
    def failure(
        cls,
        error_code: str,
        error_message: str | None = None,
        http_status: int | None = None,
        payload: dict[str, Any] | None = None,
    ) -> "SupplierResult":
        return cls(
            status=FAILED,
            payload=payload,
            error_code=error_code,
            error_message=error_message,
            http_status=http_status,
        )


class HotelSupplierGateway(ABC):
    """
    Transport to the hotel supplier.

    Every method takes a supplier-shaped request body and never raises for
    supplier or transport failures: those come back as a FAILED result with
    an error code (NETWORK_ERROR, TIMEOUT, CIRCUIT_OPEN, HTTP_<status>,
    API_ERROR).
    """

    @abstractmethod
    async def search(self, request: dict[str, Any]) -> SupplierResult:
        """Hotel availability search."""
        raise NotImplementedError

    @abstractmethod
    async def hotel_details(self, request: dict[str, Any]) -> SupplierResult:
        """Static hotel details for one or more hotel codes."""
        raise NotImplementedError

    @abstractmethod
    async def pre_book(self, request: dict[str, Any]) -> SupplierResult:
        """Re-validate price and policy of an offer before booking."""
        raise NotImplementedError

    @abstractmethod
    async def book(self, request: dict[str, Any]) -> SupplierResult:
        """
        Create the booking.

        Not idempotent on the supplier side: implementations must never
        retry this call.
        """
        raise NotImplementedError

    @abstractmethod
    async def booking_detail(self, request: dict[str, Any]) -> SupplierResult:
        """Booking detail by confirmation number or booking reference id."""
        raise NotImplementedError

    @abstractmethod
    async def bookings_by_date(self, request: dict[str, Any]) -> SupplierResult:
        """Bookings whose stay falls in a date range."""
        raise NotImplementedError

    @abstractmethod
    async def cancel(self, request: dict[str, Any]) -> SupplierResult:
        """Cancel a booking. Never retried."""
        raise NotImplementedError
