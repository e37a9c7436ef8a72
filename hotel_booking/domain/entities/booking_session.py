"""BookingSession entity - the single booking-in-progress of a user context."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from hotel_booking.domain.entities.customer import CustomerDetails
from hotel_booking.domain.entities.hotel import HotelResult
from hotel_booking.domain.entities.price_lock import PriceLock, Reconciliation
from hotel_booking.domain.entities.search_criteria import SearchCriteria
from hotel_booking.domain.errors import InvalidSessionPhaseError


class SessionPhase(str, Enum):
    IDLE = "IDLE"
    SELECTED = "SELECTED"
    PRICE_LOCKED = "PRICE_LOCKED"
    DETAILS_CAPTURED = "DETAILS_CAPTURED"
    COMMITTED = "COMMITTED"
    FAILED = "FAILED"


TERMINAL_PHASES = (SessionPhase.COMMITTED, SessionPhase.FAILED)


@dataclass
class BookingSession:
    """
    Mutable state of one booking-in-progress.

    Mutated only through the transition methods below, which check the
    current phase. I/O is orchestrated by BookingSessionMachine; this class
    holds no references to gateways or stores.
    """

    session_id: str
    context_id: str
    criteria: SearchCriteria
    hotel: HotelResult
    idempotency_key: str
    created_at: datetime
    updated_at: datetime
    phase: SessionPhase = SessionPhase.SELECTED

    # Price lock
    price_lock: PriceLock | None = None
    reconciliation: Reconciliation | None = None
    price_or_policy_changed: bool = False
    price_change_acknowledged: bool = False

    # Guests
    customer_details: CustomerDetails | None = None

    # Commit
    commit_attempted: bool = False
    commit_outcome_unknown: bool = False
    confirmation_number: str | None = None
    booking_reference_id: str | None = None
    booking_id: int | None = None
    last_error_code: str | None = None

    # Not persisted: guards against overlapping transitions on this instance.
    transition_in_flight: str | None = field(default=None, compare=False, repr=False)

    # === Properties ===

    @property
    def original_booking_code(self) -> str:
        return self.hotel.booking_code

    @property
    def locked_booking_code(self) -> str | None:
        return self.price_lock.locked_booking_code if self.price_lock else None

    @property
    def is_terminal(self) -> bool:
        return self.phase in TERMINAL_PHASES

    @property
    def has_unacknowledged_change(self) -> bool:
        return self.price_or_policy_changed and not self.price_change_acknowledged

    def is_expired(self, now: datetime, ttl: timedelta) -> bool:
        """Inactive beyond ttl while still in a non-terminal phase."""
        if self.is_terminal or self.phase == SessionPhase.IDLE:
            return False
        return now - self.updated_at > ttl

    # === Transitions ===

    def require_phase(self, expected: SessionPhase | tuple[SessionPhase, ...], operation: str) -> None:
        allowed = expected if isinstance(expected, tuple) else (expected,)
        if self.phase not in allowed:
            raise InvalidSessionPhaseError(
                current_phase=self.phase.value,
                expected_phase=[phase.value for phase in allowed],
                operation=operation,
            )

    def apply_price_lock(self, price_lock: PriceLock, reconciliation: Reconciliation, now: datetime) -> None:
        self.require_phase(SessionPhase.SELECTED, "lock price")
        self.price_lock = price_lock
        self.reconciliation = reconciliation
        self.price_or_policy_changed = reconciliation.changed
        self.price_change_acknowledged = False
        self.phase = SessionPhase.PRICE_LOCKED
        self.touch(now)

    def acknowledge_price_change(self, now: datetime) -> None:
        self.require_phase((SessionPhase.PRICE_LOCKED, SessionPhase.DETAILS_CAPTURED), "acknowledge price change")
        if self.price_or_policy_changed:
            self.price_change_acknowledged = True
            self.price_or_policy_changed = False
        self.touch(now)

    def capture_details(self, customer_details: CustomerDetails, now: datetime) -> None:
        self.require_phase((SessionPhase.PRICE_LOCKED, SessionPhase.DETAILS_CAPTURED), "capture guest details")
        self.customer_details = customer_details
        self.phase = SessionPhase.DETAILS_CAPTURED
        self.touch(now)

    def mark_commit_attempted(self, booking_reference_id: str, now: datetime) -> None:
        self.require_phase(SessionPhase.DETAILS_CAPTURED, "commit")
        self.commit_attempted = True
        self.booking_reference_id = booking_reference_id
        self.touch(now)

    def mark_committed(
        self, confirmation_number: str, booking_reference_id: str, booking_id: int, now: datetime
    ) -> None:
        self.confirmation_number = confirmation_number
        self.booking_reference_id = booking_reference_id
        self.booking_id = booking_id
        self.commit_outcome_unknown = False
        self.last_error_code = None
        self.phase = SessionPhase.COMMITTED
        self.touch(now)

    def mark_failed(self, error_code: str, now: datetime, outcome_unknown: bool = False) -> None:
        if self.phase == SessionPhase.COMMITTED:
            raise InvalidSessionPhaseError(self.phase.value, "non-terminal", "fail")
        self.last_error_code = error_code
        self.commit_outcome_unknown = outcome_unknown
        self.phase = SessionPhase.FAILED
        self.touch(now)

    def resolve_not_booked(self, now: datetime) -> None:
        """An unknown commit outcome turned out to be 'not booked'."""
        self.require_phase(SessionPhase.FAILED, "resolve commit outcome")
        self.commit_outcome_unknown = False
        self.last_error_code = "COMMIT_FAILED"
        self.touch(now)

    def restart(self, idempotency_key: str, now: datetime) -> None:
        """Back to SELECTED with the same offer; a fresh price lock is required."""
        self.require_phase(SessionPhase.FAILED, "restart")
        self.idempotency_key = idempotency_key
        self.price_lock = None
        self.reconciliation = None
        self.price_or_policy_changed = False
        self.price_change_acknowledged = False
        self.customer_details = None
        self.commit_attempted = False
        self.commit_outcome_unknown = False
        self.booking_reference_id = None
        self.last_error_code = None
        self.phase = SessionPhase.SELECTED
        self.touch(now)

    def abandon(self, now: datetime) -> None:
        if self.phase == SessionPhase.COMMITTED:
            raise InvalidSessionPhaseError(self.phase.value, "non-committed", "abandon")
        self.phase = SessionPhase.IDLE
        self.touch(now)

    def touch(self, now: datetime) -> None:
        self.updated_at = now

    # === Serialization ===

    def to_snapshot(self) -> dict[str, Any]:
        """JSON-friendly snapshot for short-lived session storage."""
        return {
            "session_id": self.session_id,
            "context_id": self.context_id,
            "phase": self.phase.value,
            "criteria": self.criteria.to_dict(),
            "hotel": self.hotel.to_dict(),
            "idempotency_key": self.idempotency_key,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "price_lock": self.price_lock.to_dict() if self.price_lock else None,
            "reconciliation": self.reconciliation.to_dict() if self.reconciliation else None,
            "price_or_policy_changed": self.price_or_policy_changed,
            "price_change_acknowledged": self.price_change_acknowledged,
            "customer_details": self.customer_details.to_dict() if self.customer_details else None,
            "commit_attempted": self.commit_attempted,
            "commit_outcome_unknown": self.commit_outcome_unknown,
            "confirmation_number": self.confirmation_number,
            "booking_reference_id": self.booking_reference_id,
            "booking_id": self.booking_id,
            "last_error_code": self.last_error_code,
        }

    @classmethod
    def from_snapshot(cls, data: dict[str, Any]) -> "BookingSession":
        """Rehydrate a session exactly as it was stored, phase included."""
        return cls(
            session_id=data["session_id"],
            context_id=data["context_id"],
            phase=SessionPhase(data["phase"]),
            criteria=SearchCriteria.from_dict(data["criteria"]),
            hotel=HotelResult.from_dict(data["hotel"]),
            idempotency_key=data["idempotency_key"],
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
            price_lock=PriceLock.from_dict(data["price_lock"]) if data.get("price_lock") else None,
            reconciliation=(
                Reconciliation.from_dict(data["reconciliation"]) if data.get("reconciliation") else None
            ),
            price_or_policy_changed=data.get("price_or_policy_changed", False),
            price_change_acknowledged=data.get("price_change_acknowledged", False),
            customer_details=(
                CustomerDetails.from_dict(data["customer_details"]) if data.get("customer_details") else None
            ),
            commit_attempted=data.get("commit_attempted", False),
            commit_outcome_unknown=data.get("commit_outcome_unknown", False),
            confirmation_number=data.get("confirmation_number"),
            booking_reference_id=data.get("booking_reference_id"),
            booking_id=data.get("booking_id"),
            last_error_code=data.get("last_error_code"),
        )
