"""
Booking Session State Machine.

Drives one booking-in-progress per user context through

    IDLE -> SELECTED -> PRICE_LOCKED -> DETAILS_CAPTURED -> COMMITTED

with FAILED reachable from every non-terminal phase. Only lock_price,
commit and resume talk to the supplier. Sessions are persisted as
snapshots through the SessionStore after every transition.
"""

import logging
from contextlib import contextmanager
from datetime import timedelta

from hotel_booking.application import supplier_mapping
from hotel_booking.application.interfaces.clock import Clock
from hotel_booking.application.interfaces.hotel_supplier_gateway import HotelSupplierGateway, SupplierResult
from hotel_booking.application.interfaces.id_generator import IdGenerator
from hotel_booking.application.interfaces.session_store import SessionStore
from hotel_booking.application.use_cases.booking_management import BookingManagementService
from hotel_booking.application.use_cases.reconcile_price import reconcile_price_lock
from hotel_booking.domain.entities.booking_session import BookingSession, SessionPhase
from hotel_booking.domain.entities.committed_booking import BookingStatus, CommittedBooking
from hotel_booking.domain.entities.customer import ContactInfo, CustomerDetails
from hotel_booking.domain.entities.hotel import HotelResult
from hotel_booking.domain.entities.search_criteria import SearchCriteria
from hotel_booking.domain.errors import (
    CommitFailedError,
    CommitUnknownError,
    InventoryUnavailableError,
    InvalidSessionPhaseError,
    PriceChangeNotAcknowledgedError,
    SessionBusyError,
    SessionExpiredError,
    SessionNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

RETRYABLE_HTTP_STATUSES = (408, 429)


def _is_transient(result: SupplierResult) -> bool:
    """Failures that say nothing about the offer itself."""
    status = result.http_status or 0
    return supplier_mapping.is_transport_failure(result) or status >= 500 or status in RETRYABLE_HTTP_STATUSES


def _is_ambiguous_commit(result: SupplierResult) -> bool:
    """
    The book request may have reached the supplier.

    An open circuit means nothing was sent, so it is a definite failure.
    """
    if result.error_code in (supplier_mapping.TIMEOUT, supplier_mapping.NETWORK_ERROR):
        return True
    return (result.http_status or 0) >= 500


class BookingSessionMachine:
    """
    Orchestrates booking sessions.

    Sessions are passed in by handle; callers obtain them with select() or
    current(). Overlapping transitions on the same session raise
    SessionBusyError.
    """

    def __init__(
        self,
        gateway: HotelSupplierGateway,
        store: SessionStore,
        booking_management: BookingManagementService,
        clock: Clock,
        id_generator: IdGenerator,
        payment_mode: str = "Limit",
        session_ttl: timedelta = timedelta(minutes=30),
        timeout_seconds: float | None = None,
    ):
        self._gateway = gateway
        self._store = store
        self._booking_management = booking_management
        self._clock = clock
        self._id_generator = id_generator
        self._payment_mode = payment_mode
        self._session_ttl = session_ttl
        self._timeout_seconds = timeout_seconds
        self._in_flight: set[str] = set()

    @property
    def session_ttl(self) -> timedelta:
        return self._session_ttl

    # === Session lookup ===

    async def select(
        self, context_id: str, criteria: SearchCriteria | None, hotel: HotelResult | None
    ) -> BookingSession:
        """
        Start a session for the selected offer.

        Any uncommitted session of the same context is discarded.
        """
        if criteria is None:
            raise ValidationError("criteria", "Search criteria are required to start a booking")
        criteria.validate(today=self._clock.today().date())
        if hotel is None or not hotel.booking_code:
            raise ValidationError("booking_code", "A hotel offer with a booking code is required")
        if hotel.is_fallback:
            raise ValidationError(
                "hotel", "Sample results cannot be booked. Please search again when live availability returns."
            )

        previous = await self._store.get(context_id)
        if previous is not None:
            if previous["session_id"] in self._in_flight:
                raise SessionBusyError(previous["session_id"], "start a new booking")
            logger.info(
                "Discarding previous booking session",
                extra={"context_id": context_id, "session_id": previous["session_id"], "phase": previous["phase"]},
            )

        now = self._clock.now()
        session = BookingSession(
            session_id=self._id_generator.generate_session_id(),
            context_id=context_id,
            criteria=criteria,
            hotel=hotel,
            idempotency_key=self._id_generator.generate_idempotency_key(),
            created_at=now,
            updated_at=now,
            phase=SessionPhase.SELECTED,
        )
        await self._persist(session)
        logger.info(
            "Booking session started",
            extra={
                "context_id": context_id,
                "session_id": session.session_id,
                "hotel_code": hotel.hotel_code,
            },
        )
        return session

    async def current(self, context_id: str) -> BookingSession:
        """Rehydrate the active session of a context, exactly as stored."""
        snapshot = await self._store.get(context_id)
        if snapshot is None:
            raise SessionNotFoundError(context_id)
        return BookingSession.from_snapshot(snapshot)

    async def active(self, context_id: str) -> BookingSession:
        """current() plus expiry enforcement."""
        session = await self.current(context_id)
        if await self.expire_if_stale(session):
            raise SessionExpiredError(session.session_id)
        return session

    async def expire_if_stale(self, session: BookingSession) -> bool:
        """Fail and clear a session that stayed inactive beyond the TTL."""
        now = self._clock.now()
        if not session.is_expired(now, self._session_ttl):
            return False
        session.mark_failed("SESSION_EXPIRED", now)
        await self._store.clear(session.context_id)
        logger.info(
            "Booking session expired",
            extra={"context_id": session.context_id, "session_id": session.session_id},
        )
        return True

    # === Transitions ===

    async def lock_price(self, session: BookingSession) -> BookingSession:
        """
        Re-validate the offer with the supplier (pre-book).

        Transient failures leave the session SELECTED so the lock can be
        retried; supplier rejections fail the session.
        """
        with self._transition(session, "lock price"):
            session.require_phase(SessionPhase.SELECTED, "lock price")
            booking_code = session.original_booking_code

            result = await self._gateway.pre_book(
                supplier_mapping.to_pre_book_request(booking_code, self._payment_mode)
            )

            if not result.ok:
                if _is_transient(result):
                    logger.warning(
                        "Price lock temporarily failed",
                        extra={"session_id": session.session_id, "error_code": result.error_code},
                    )
                    raise supplier_mapping.map_supplier_error(
                        "pre_book", result, identifier=booking_code, timeout_seconds=self._timeout_seconds
                    )

                if supplier_mapping.is_inventory_unavailable(result):
                    error = InventoryUnavailableError(
                        booking_code, supplier_message=result.error_message, supplier_payload=result.payload
                    )
                else:
                    error = supplier_mapping.map_supplier_error("pre_book", result, identifier=booking_code)
                session.mark_failed(error.code, self._clock.now())
                await self._persist(session)
                logger.warning(
                    "Price lock rejected by supplier",
                    extra={
                        "session_id": session.session_id,
                        "error_code": error.code,
                        "supplier_code": result.error_code,
                    },
                )
                raise error

            price_lock = supplier_mapping.price_lock_from_pre_book_response(result.payload or {}, booking_code)
            reconciliation = reconcile_price_lock(session.hotel, price_lock)
            session.apply_price_lock(price_lock, reconciliation, self._clock.now())
            await self._persist(session)
            logger.info(
                "Price locked",
                extra={
                    "session_id": session.session_id,
                    "locked_price": str(price_lock.price),
                    "price_or_policy_changed": session.price_or_policy_changed,
                },
            )
            return session

    async def acknowledge_price_change(self, session: BookingSession) -> BookingSession:
        with self._transition(session, "acknowledge price change"):
            session.acknowledge_price_change(self._clock.now())
            await self._persist(session)
            return session

    async def capture_details(self, session: BookingSession, customer_details: CustomerDetails) -> BookingSession:
        """Attach guests; the roster must mirror the searched room composition."""
        with self._transition(session, "capture guest details"):
            session.require_phase(
                (SessionPhase.PRICE_LOCKED, SessionPhase.DETAILS_CAPTURED), "capture guest details"
            )
            self._validate_customer_details(session.criteria, customer_details)
            session.capture_details(customer_details, self._clock.now())
            await self._persist(session)
            return session

    async def commit(self, session: BookingSession, contact: ContactInfo | None = None) -> CommittedBooking:
        """
        Book the locked offer. Never retried.

        Raises:
            PriceChangeNotAcknowledgedError: a reported change is pending;
                nothing is sent and the phase is unchanged.
            CommitFailedError: the supplier definitely did not book.
            CommitUnknownError: the supplier may have booked; use resume().
        """
        with self._transition(session, "commit"):
            session.require_phase(SessionPhase.DETAILS_CAPTURED, "commit")
            if session.commit_attempted:
                # A previous attempt may have reached the supplier
                raise await self._record_unknown_commit(
                    session, session.booking_reference_id, reason="a previous commit attempt did not finish"
                )
            if session.has_unacknowledged_change:
                raise PriceChangeNotAcknowledgedError(
                    session.session_id,
                    old_price=str(session.reconciliation.old_price),
                    new_price=str(session.reconciliation.new_price),
                )
            price_lock = session.price_lock
            customer_details = session.customer_details

            booking_reference_id = self._id_generator.generate_booking_reference_id()
            session.mark_commit_attempted(booking_reference_id, self._clock.now())
            await self._persist(session)

            request = supplier_mapping.to_book_request(
                locked_booking_code=price_lock.locked_booking_code,
                customer_details=customer_details,
                client_reference_id=session.idempotency_key,
                booking_reference_id=booking_reference_id,
                total_fare=price_lock.price.amount,
                contact=contact or ContactInfo(),
                payment_mode=self._payment_mode,
            )
            now = self._clock.now()
            booking = None
            try:
                result = await self._gateway.book(request)
                if result.ok and (result.payload or {}).get("ConfirmationNo"):
                    booking = supplier_mapping.committed_booking_from_book_response(
                        result.payload,
                        booking_reference_id=booking_reference_id,
                        check_in=session.criteria.check_in,
                        check_out=session.criteria.check_out,
                        hotel_name=session.hotel.hotel_name,
                        total_fare=price_lock.price,
                        customer_details=customer_details,
                        booked_on=now,
                    )
            except Exception as e:
                logger.exception(
                    "Booking commit raised",
                    extra={"session_id": session.session_id, "booking_reference_id": booking_reference_id},
                )
                raise await self._record_unknown_commit(
                    session, booking_reference_id, reason=f"{type(e).__name__}: {e}"
                ) from e

            if booking is not None:
                session.mark_committed(
                    booking.confirmation_number, booking.booking_reference_id, booking.booking_id, now
                )
                await self._booking_management.record(booking)
                await self._store.clear(session.context_id)
                logger.info(
                    "Booking committed",
                    extra={
                        "session_id": session.session_id,
                        "confirmation_number": booking.confirmation_number,
                    },
                )
                return booking

            if result.ok or _is_ambiguous_commit(result):
                raise await self._record_unknown_commit(
                    session,
                    booking_reference_id,
                    reason=result.error_message or "supplier response had no confirmation number",
                    error_code=result.error_code,
                    supplier_payload=result.payload,
                )

            session.mark_failed("COMMIT_FAILED", self._clock.now())
            await self._persist(session)
            logger.error(
                "Booking commit rejected",
                extra={
                    "session_id": session.session_id,
                    "error_code": result.error_code,
                    "http_status": result.http_status,
                },
            )
            raise CommitFailedError(
                session.session_id,
                supplier_message=result.error_message,
                supplier_code=result.error_code,
                supplier_payload=result.payload,
            )

    async def resume(self, session: BookingSession) -> CommittedBooking | None:
        """
        Settle an unknown commit outcome by asking Booking Management.

        Returns the committed booking when the supplier has it. Otherwise
        the session stays FAILED with the unknown flag cleared, so restart()
        is allowed, and None is returned.
        """
        with self._transition(session, "resume"):
            if session.phase != SessionPhase.FAILED or not session.commit_outcome_unknown:
                raise InvalidSessionPhaseError(session.phase.value, "FAILED with unknown commit outcome", "resume")

            booking = await self._booking_management.find_by_booking_reference(session.booking_reference_id)
            now = self._clock.now()
            if booking is not None and booking.booking_status != BookingStatus.FAILED:
                session.mark_committed(
                    booking.confirmation_number, booking.booking_reference_id, booking.booking_id, now
                )
                await self._store.clear(session.context_id)
                logger.info(
                    "Unknown commit resolved as booked",
                    extra={"session_id": session.session_id, "confirmation_number": booking.confirmation_number},
                )
                return booking

            session.resolve_not_booked(now)
            await self._persist(session)
            logger.info(
                "Unknown commit resolved as not booked",
                extra={"session_id": session.session_id, "booking_reference_id": session.booking_reference_id},
            )
            return None

    async def restart(self, session: BookingSession) -> BookingSession:
        """FAILED -> SELECTED on the same offer, with a fresh idempotency key."""
        with self._transition(session, "restart"):
            if session.phase == SessionPhase.FAILED and session.commit_outcome_unknown:
                raise CommitUnknownError(
                    session.session_id,
                    session.booking_reference_id,
                    reason="booking status must be checked before restarting",
                )
            session.restart(self._id_generator.generate_idempotency_key(), self._clock.now())
            await self._persist(session)
            return session

    async def abandon(self, session: BookingSession) -> None:
        with self._transition(session, "abandon"):
            session.abandon(self._clock.now())
            await self._store.clear(session.context_id)
            logger.info(
                "Booking session abandoned",
                extra={"context_id": session.context_id, "session_id": session.session_id},
            )

    # === Helpers ===

    @contextmanager
    def _transition(self, session: BookingSession, operation: str):
        if session.session_id in self._in_flight or session.transition_in_flight:
            raise SessionBusyError(session.session_id, operation)
        self._in_flight.add(session.session_id)
        session.transition_in_flight = operation
        try:
            yield
        finally:
            session.transition_in_flight = None
            self._in_flight.discard(session.session_id)

    async def _persist(self, session: BookingSession) -> None:
        await self._store.put(session.context_id, session.to_snapshot())

    async def _record_unknown_commit(
        self,
        session: BookingSession,
        booking_reference_id: str | None,
        reason: str,
        error_code: str | None = None,
        supplier_payload: dict | None = None,
    ) -> CommitUnknownError:
        """Fail the session as resumable and return the error to raise."""
        session.mark_failed("COMMIT_UNKNOWN", self._clock.now(), outcome_unknown=True)
        await self._persist(session)
        logger.error(
            "Booking commit outcome unknown",
            extra={
                "session_id": session.session_id,
                "booking_reference_id": booking_reference_id,
                "error_code": error_code,
            },
        )
        return CommitUnknownError(
            session.session_id, booking_reference_id, reason=reason, supplier_payload=supplier_payload
        )

    @staticmethod
    def _validate_customer_details(criteria: SearchCriteria, customer_details: CustomerDetails) -> None:
        if customer_details is None or not customer_details.rooms:
            raise ValidationError("customer_details", "Guest details are required")
        if len(customer_details.rooms) != len(criteria.rooms):
            raise ValidationError(
                "customer_details",
                f"Expected guest details for {len(criteria.rooms)} rooms, got {len(customer_details.rooms)}",
            )
        for room_number, (requested, captured) in enumerate(zip(criteria.rooms, customer_details.rooms), start=1):
            if len(captured.guests) != requested.total_guests:
                raise ValidationError(
                    "customer_details",
                    f"Room {room_number}: expected {requested.total_guests} guests, got {len(captured.guests)}",
                )
            if captured.adult_count != requested.adults:
                raise ValidationError(
                    "customer_details",
                    f"Room {room_number}: expected {requested.adults} adults, got {captured.adult_count}",
                )
            for guest in captured.guests:
                if not guest.first_name.strip() or not guest.last_name.strip():
                    raise ValidationError(
                        "customer_details", f"Room {room_number}: guest first and last names are required"
                    )
