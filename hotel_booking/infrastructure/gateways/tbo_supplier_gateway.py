import asyncio
import json
import logging
from typing import Any, Awaitable, Callable

import httpx
from pybreaker import CircuitBreaker

from hotel_booking.application.interfaces.hotel_supplier_gateway import HotelSupplierGateway, SupplierResult
from hotel_booking.infrastructure.circuit_breaker import (
    CircuitBreakerError,
    ensure_available,
    record_failure,
    record_success,
    supplier_breaker,
)
from hotel_booking.infrastructure.retry import retry_async

logger = logging.getLogger(__name__)

# Response body Status values that signal an API-level error
API_ERROR_STATUSES = (0, 2)
RETRYABLE_HTTP_STATUSES = (408, 429, 500, 502, 503, 504)
RETRYABLE_ERROR_CODES = ("NETWORK_ERROR", "TIMEOUT")


def is_retryable_result(result: SupplierResult) -> bool:
    if result.ok:
        return False
    if result.error_code in RETRYABLE_ERROR_CODES:
        return True
    return result.http_status in RETRYABLE_HTTP_STATUSES


def _error_details(body: Any) -> tuple[str | None, str | None]:
    """Supplier error code and message, wherever the body puts them."""
    if not isinstance(body, dict):
        return None, None
    error = body.get("Error") if isinstance(body.get("Error"), dict) else {}
    code = body.get("ErrorCode") or error.get("ErrorCode")
    message = body.get("Message") or error.get("ErrorMessage")
    return (str(code) if code else None), message


class TboHotelSupplierGateway(HotelSupplierGateway):
    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        timeout_seconds: float = 10.0,
        retry_attempts: int = 3,
        retry_base_delay: float = 1.0,
        retry_max_delay: float = 8.0,
        breaker: CircuitBreaker | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """
        HTTP gateway to the TBO Hotel API.

        Args:
            base_url: Base URL of the supplier API
            username: Basic auth user
            password: Basic auth password
            timeout_seconds: Request timeout in seconds (default: 10.0)
            retry_attempts: Total attempts for retryable calls (default: 3)
            retry_base_delay: Base backoff delay in seconds (default: 1.0)
            retry_max_delay: Cap for a single backoff delay (default: 8.0)
            breaker: Circuit breaker; defaults to the shared supplier breaker
            sleep: Injectable sleep used between retries
        """
        self._base_url = base_url.rstrip("/")
        self._auth = (username, password)
        self._timeout = timeout_seconds
        self._retry_attempts = retry_attempts
        self._retry_base_delay = retry_base_delay
        self._retry_max_delay = retry_max_delay
        self._breaker = breaker or supplier_breaker
        self._sleep = sleep

    @property
    def timeout_seconds(self) -> float:
        return self._timeout

    @property
    def breaker(self) -> CircuitBreaker:
        return self._breaker

    # Idempotent reads and pre-book are retried on transient failures.

    async def search(self, request: dict[str, Any]) -> SupplierResult:
        return await self._post_with_retry("search", "/search", request)

    async def hotel_details(self, request: dict[str, Any]) -> SupplierResult:
        return await self._post_with_retry("hotel_details", "/Hoteldetails", request)

    async def pre_book(self, request: dict[str, Any]) -> SupplierResult:
        return await self._post_with_retry("pre_book", "/PreBook", request)

    async def booking_detail(self, request: dict[str, Any]) -> SupplierResult:
        return await self._post_with_retry("booking_detail", "/BookingDetail", request)

    async def bookings_by_date(self, request: dict[str, Any]) -> SupplierResult:
        return await self._post_with_retry("bookings_by_date", "/BookingDetailsBasedOnDate", request)

    # Book and cancel are sent exactly once.

    async def book(self, request: dict[str, Any]) -> SupplierResult:
        return await self._post("book", "/Book", request)

    async def cancel(self, request: dict[str, Any]) -> SupplierResult:
        return await self._post("cancel", "/Cancel", request)

    async def _post_with_retry(self, operation: str, path: str, body: dict[str, Any]) -> SupplierResult:
        return await retry_async(
            lambda: self._post(operation, path, body),
            should_retry=is_retryable_result,
            max_attempts=self._retry_attempts,
            base_delay=self._retry_base_delay,
            max_delay=self._retry_max_delay,
            operation=operation,
            sleep=self._sleep,
        )

    async def _post(self, operation: str, path: str, body: dict[str, Any]) -> SupplierResult:
        """
        Send one request, protected by the circuit breaker.

        Returns:
            SupplierResult with status SUCCESS or FAILED; never raises for
            transport or supplier errors.
        """
        url = f"{self._base_url}{path}"

        try:
            ensure_available(self._breaker)
        except CircuitBreakerError as exc:
            logger.error(
                "Supplier circuit breaker is open - service unavailable",
                extra={"operation": operation, "circuit_state": str(exc)},
            )
            return SupplierResult.failure(
                "CIRCUIT_OPEN", "Supplier service temporarily unavailable (circuit breaker open)"
            )

        try:
            async with httpx.AsyncClient(timeout=self._timeout, auth=self._auth) as client:
                response = await client.post(url, json=body, headers={"Content-Type": "application/json"})
        except httpx.TimeoutException as exc:
            record_failure(self._breaker, exc)
            logger.warning(
                "Supplier request timeout",
                extra={"operation": operation, "timeout": self._timeout},
            )
            return SupplierResult.failure("TIMEOUT", str(exc) or "Request timed out")
        except httpx.HTTPError as exc:
            record_failure(self._breaker, exc)
            logger.error(
                "Supplier network error",
                exc_info=exc,
                extra={"operation": operation},
            )
            return SupplierResult.failure("NETWORK_ERROR", str(exc) or "Network request failed")

        payload: Any = None
        try:
            payload = response.json()
        except (json.JSONDecodeError, ValueError):
            payload = None
        body_dict = payload if isinstance(payload, dict) else None

        if response.status_code >= 500:
            error = httpx.HTTPStatusError(
                f"Supplier returned {response.status_code}", request=response.request, response=response
            )
            record_failure(self._breaker, error)
        else:
            record_success(self._breaker)

        if not 200 <= response.status_code < 300:
            supplier_code, message = _error_details(body_dict)
            logger.warning(
                "Supplier returned non-2xx",
                extra={"operation": operation, "http_status": response.status_code, "supplier_code": supplier_code},
            )
            return SupplierResult.failure(
                supplier_code or f"HTTP_{response.status_code}",
                message or response.text,
                http_status=response.status_code,
                payload=body_dict,
            )

        if body_dict is None:
            return SupplierResult.failure(
                "API_ERROR", "Supplier response is not a JSON object", http_status=response.status_code
            )

        if body_dict.get("Status") in API_ERROR_STATUSES:
            supplier_code, message = _error_details(body_dict)
            logger.warning(
                "Supplier reported an API error",
                extra={
                    "operation": operation,
                    "supplier_status": body_dict.get("Status"),
                    "supplier_code": supplier_code,
                },
            )
            return SupplierResult.failure(
                supplier_code or "API_ERROR",
                message or "API request failed",
                http_status=response.status_code,
                payload=body_dict,
            )

        return SupplierResult.success(body_dict, http_status=response.status_code)
