"""Domain exceptions for the hotel booking core."""

from typing import Any


class DomainError(Exception):
    """Base class for every error that crosses the core boundary."""

    retryable: bool = False
    default_user_message: str = "The booking request could not be completed."

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        supplier_payload: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code or self.__class__.__name__
        self.user_message = user_message or self.default_user_message
        # Kept for logging only, never returned to the end user.
        self.supplier_payload = supplier_payload
        super().__init__(self.message)


# === Input errors ===


class ValidationError(DomainError):
    """Bad caller input. Never sent to the supplier."""

    def __init__(self, field: str, message: str):
        super().__init__(
            message=f"Validation failed on '{field}': {message}",
            code="VALIDATION_ERROR",
            user_message=message,
        )
        self.field = field


class InvalidIdentifierError(DomainError):
    """A booking identifier is missing, ambiguous or malformed."""

    def __init__(self, message: str, supplier_payload: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="INVALID_IDENTIFIER",
            user_message="Invalid confirmation number provided.",
            supplier_payload=supplier_payload,
        )


# === Session machine errors ===


class InvalidSessionPhaseError(DomainError):
    """The session phase does not allow the requested transition."""

    def __init__(self, current_phase: str, expected_phase: str | list[str], operation: str):
        expected = expected_phase if isinstance(expected_phase, str) else ", ".join(expected_phase)
        super().__init__(
            message=f"Cannot {operation}: current phase '{current_phase}', expected '{expected}'",
            code="INVALID_SESSION_PHASE",
            user_message="This step is not available for the current booking.",
        )
        self.current_phase = current_phase
        self.expected_phase = expected_phase
        self.operation = operation


class SessionBusyError(DomainError):
    """Another transition is already running on the same session."""

    def __init__(self, session_id: str, operation: str):
        super().__init__(
            message=f"Session {session_id} is busy; cannot {operation} concurrently",
            code="SESSION_BUSY",
            user_message="Your booking is already being processed. Please wait.",
        )
        self.session_id = session_id
        self.operation = operation


class SessionNotFoundError(DomainError):
    """No active booking session for the user context."""

    def __init__(self, context_id: str):
        super().__init__(
            message=f"No active booking session for context {context_id}",
            code="SESSION_NOT_FOUND",
            user_message="No active hotel booking session.",
        )
        self.context_id = context_id


class SessionExpiredError(DomainError):
    """The session stayed inactive longer than the allowed window."""

    def __init__(self, session_id: str):
        super().__init__(
            message=f"Booking session {session_id} has expired",
            code="SESSION_EXPIRED",
            user_message="Hotel booking session has expired. Please start again.",
        )
        self.session_id = session_id


# === Price lock / commit errors ===


class InventoryUnavailableError(DomainError):
    """The room was sold out while locking the price."""

    def __init__(self, booking_code: str, supplier_message: str | None = None, supplier_payload=None):
        super().__init__(
            message=f"Room no longer available for booking code {booking_code}: {supplier_message}",
            code="INVENTORY_UNAVAILABLE",
            user_message="This room is no longer available. Please choose another option.",
            supplier_payload=supplier_payload,
        )
        self.booking_code = booking_code


class PriceChangeNotAcknowledgedError(DomainError):
    """Commit attempted while a reported price/policy change is unacknowledged."""

    def __init__(self, session_id: str, old_price: Any, new_price: Any):
        super().__init__(
            message=f"Session {session_id}: price/policy changed ({old_price} -> {new_price}) "
            f"and was not acknowledged",
            code="PRICE_CHANGE_NOT_ACKNOWLEDGED",
            user_message="The price or cancellation policy has changed. Please review and confirm.",
        )
        self.session_id = session_id
        self.old_price = old_price
        self.new_price = new_price


class CommitFailedError(DomainError):
    """The supplier definitely did not create the booking."""

    def __init__(self, session_id: str, supplier_message: str | None = None, supplier_code: str | None = None,
                 supplier_payload: dict[str, Any] | None = None):
        super().__init__(
            message=f"Commit failed for session {session_id}: {supplier_message}",
            code="COMMIT_FAILED",
            user_message="Booking failed. Please start again from the selected hotel.",
            supplier_payload=supplier_payload,
        )
        self.session_id = session_id
        self.supplier_code = supplier_code


class CommitUnknownError(DomainError):
    """The supplier may or may not have created the booking."""

    def __init__(self, session_id: str, booking_reference_id: str | None, reason: str | None = None,
                 supplier_payload: dict[str, Any] | None = None):
        super().__init__(
            message=f"Commit outcome unknown for session {session_id} "
            f"(reference {booking_reference_id}): {reason}",
            code="COMMIT_UNKNOWN",
            user_message="We could not confirm whether your booking went through. "
            "Please check the booking status before trying again.",
            supplier_payload=supplier_payload,
        )
        self.session_id = session_id
        self.booking_reference_id = booking_reference_id


# === Booking management errors ===


class BookingNotFoundError(DomainError):
    """The booking does not exist at the supplier."""

    def __init__(self, identifier: str, supplier_payload: dict[str, Any] | None = None):
        super().__init__(
            message=f"Booking not found: {identifier}",
            code="BOOKING_NOT_FOUND",
            user_message="Booking not found. Please check your confirmation number.",
            supplier_payload=supplier_payload,
        )
        self.identifier = identifier


class CancellationNotAllowedError(DomainError):
    """The booking cannot be cancelled."""

    def __init__(self, confirmation_number: str, reason: str | None = None,
                 supplier_payload: dict[str, Any] | None = None):
        super().__init__(
            message=f"Cancellation not allowed for {confirmation_number}: {reason}",
            code="CANCELLATION_NOT_ALLOWED",
            user_message="This booking cannot be cancelled. Please contact support.",
            supplier_payload=supplier_payload,
        )
        self.confirmation_number = confirmation_number


class AlreadyCancelledError(DomainError):
    """The booking was already cancelled."""

    def __init__(self, confirmation_number: str, supplier_payload: dict[str, Any] | None = None):
        super().__init__(
            message=f"Booking {confirmation_number} is already cancelled",
            code="ALREADY_CANCELLED",
            user_message="This booking has already been cancelled.",
            supplier_payload=supplier_payload,
        )
        self.confirmation_number = confirmation_number


class CancellationFailedError(DomainError):
    """Generic cancellation failure."""

    def __init__(self, confirmation_number: str, reason: str | None = None,
                 supplier_payload: dict[str, Any] | None = None):
        super().__init__(
            message=f"Cancellation failed for {confirmation_number}: {reason}",
            code="CANCELLATION_FAILED",
            user_message="Failed to cancel booking. Please try again later.",
            supplier_payload=supplier_payload,
        )
        self.confirmation_number = confirmation_number


# === Supplier / transport errors ===


class SupplierNetworkError(DomainError):
    """Transport-level failure talking to the supplier."""

    retryable = True

    def __init__(self, operation: str, reason: str | None = None):
        super().__init__(
            message=f"Network error during supplier {operation}: {reason}",
            code="NETWORK_ERROR",
            user_message="Network error occurred. Please check your connection and try again.",
        )
        self.operation = operation


class SupplierTimeoutError(DomainError):
    """The supplier did not answer in time."""

    retryable = True

    def __init__(self, operation: str, timeout_seconds: float | None = None):
        super().__init__(
            message=f"Timeout of {timeout_seconds}s during supplier {operation}",
            code="TIMEOUT",
            user_message="Request timed out. Please try again.",
        )
        self.operation = operation
        self.timeout_seconds = timeout_seconds


class SupplierUnavailableError(DomainError):
    """The supplier circuit is open; calls fail fast."""

    retryable = True

    def __init__(self, operation: str):
        super().__init__(
            message=f"Supplier unavailable (circuit open) during {operation}",
            code="CIRCUIT_OPEN",
            user_message="The hotel supplier is temporarily unavailable. Please try again shortly.",
        )
        self.operation = operation


class SupplierError(DomainError):
    """Catch-all for supplier codes without a local mapping."""

    def __init__(
        self,
        operation: str,
        supplier_code: str | None,
        supplier_message: str | None = None,
        http_status: int | None = None,
        supplier_payload: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=f"Supplier error during {operation}: [{supplier_code}] {supplier_message}",
            code="SUPPLIER_ERROR",
            supplier_payload=supplier_payload,
        )
        self.operation = operation
        self.supplier_code = supplier_code
        self.supplier_message = supplier_message
        self.http_status = http_status
