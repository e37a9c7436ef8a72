import asyncio
from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from hotel_booking.application.interfaces.hotel_supplier_gateway import SupplierResult
from hotel_booking.domain.entities.booking_session import SessionPhase
from hotel_booking.domain.entities.committed_booking import BookingStatus
from hotel_booking.domain.entities.customer import ContactInfo, CustomerDetails, Guest, GuestType, RoomGuests
from hotel_booking.domain.entities.search_criteria import RoomRequest, SearchCriteria
from hotel_booking.domain.errors import (
    CommitFailedError,
    CommitUnknownError,
    InvalidSessionPhaseError,
    InventoryUnavailableError,
    PriceChangeNotAcknowledgedError,
    SessionBusyError,
    SessionExpiredError,
    SessionNotFoundError,
    SupplierError,
    SupplierTimeoutError,
    ValidationError,
)
from hotel_booking.domain.value_objects.money import Money


async def _ready_to_commit(machine, context_id, criteria, hotel, details):
    session = await machine.select(context_id, criteria, hotel)
    await machine.lock_price(session)
    if session.price_or_policy_changed:
        await machine.acknowledge_price_change(session)
    await machine.capture_details(session, details)
    return session


# === Happy path ===


async def test_luxury_mumbai_stay_commits_confirmed_booking(
    machine, gateway, session_store, booking_repo, make_offer, bom_criteria, two_adults, context_id
):
    hotel = make_offer("LUX5STAR001")
    assert hotel.price.offered_price == Decimal("340")

    session = await machine.select(context_id, bom_criteria, hotel)
    assert session.phase == SessionPhase.SELECTED
    assert session.idempotency_key == "idem-test-000001"

    await machine.lock_price(session)
    assert session.phase == SessionPhase.PRICE_LOCKED
    assert session.locked_booking_code == "LUX5STAR001-PREBOOK"
    assert session.price_lock.price == Money(Decimal("340"), "USD")
    assert session.price_or_policy_changed is False

    await machine.capture_details(session, two_adults)
    assert session.phase == SessionPhase.DETAILS_CAPTURED

    booking = await machine.commit(session)

    assert booking.booking_status == BookingStatus.CONFIRMED
    assert booking.confirmation_number == "CONF-STUB-000001"
    assert booking.booking_reference_id == "BOOK-TEST-0001"
    assert booking.total_fare == Decimal("340")
    assert booking.check_in == date(2024, 3, 15)
    assert session.phase == SessionPhase.COMMITTED
    assert session.confirmation_number == booking.confirmation_number
    assert await session_store.get(context_id) is None
    assert await booking_repo.get_by_confirmation_number(booking.confirmation_number) == booking

    book_request = gateway.calls_for("book")[0]
    assert book_request["BookingCode"] == "LUX5STAR001-PREBOOK"
    assert book_request["ClientReferenceId"] == "idem-test-000001"
    assert book_request["TotalFare"] == 340.0
    assert len(book_request["CustomerDetails"][0]["CustomerNames"]) == 2


async def test_commit_sends_contact_details(machine, gateway, make_offer, bom_criteria, two_adults, context_id):
    session = await _ready_to_commit(machine, context_id, bom_criteria, make_offer("LUX5STAR001"), two_adults)

    await machine.commit(session, ContactInfo(email="john.doe@example.com", phone_number="+91 22 5555 0101"))

    book_request = gateway.calls_for("book")[0]
    assert book_request["EmailId"] == "john.doe@example.com"
    assert book_request["PhoneNumber"] == "+91 22 5555 0101"


# === Price changes ===


async def test_price_change_must_be_acknowledged_before_commit(
    machine, gateway, make_offer, bom_criteria, two_adults, context_id
):
    hotel = make_offer("BUS4STAR001-PRICECHANGE")
    assert hotel.price.offered_price == Decimal("210")

    session = await machine.select(context_id, bom_criteria, hotel)
    await machine.lock_price(session)

    assert session.price_or_policy_changed is True
    assert session.reconciliation.old_price == Money(Decimal("210"), "USD")
    assert session.reconciliation.new_price == Money(Decimal("200"), "USD")
    assert session.reconciliation.price_difference == Decimal("-10")

    await machine.capture_details(session, two_adults)
    with pytest.raises(PriceChangeNotAcknowledgedError):
        await machine.commit(session)

    assert session.phase == SessionPhase.DETAILS_CAPTURED
    assert session.commit_attempted is False
    assert gateway.calls_for("book") == []

    await machine.acknowledge_price_change(session)
    booking = await machine.commit(session)

    assert booking.total_fare == Decimal("200")
    assert gateway.calls_for("book")[0]["TotalFare"] == 200.0


async def test_acknowledging_before_details_is_kept(machine, make_offer, bom_criteria, two_adults, context_id):
    session = await machine.select(context_id, bom_criteria, make_offer("BUS4STAR001-PRICECHANGE"))
    await machine.lock_price(session)
    await machine.acknowledge_price_change(session)
    await machine.capture_details(session, two_adults)

    assert session.price_change_acknowledged is True
    booking = await machine.commit(session)
    assert booking.booking_status == BookingStatus.CONFIRMED


# === Phase guards ===


async def test_commit_from_selected_has_no_side_effects(
    machine, gateway, session_store, make_offer, bom_criteria, context_id
):
    session = await machine.select(context_id, bom_criteria, make_offer("LUX5STAR001"))

    with pytest.raises(InvalidSessionPhaseError):
        await machine.commit(session)

    assert session.phase == SessionPhase.SELECTED
    assert gateway.calls_for("book") == []
    assert (await session_store.get(context_id))["phase"] == SessionPhase.SELECTED.value


async def test_capture_details_requires_locked_price(machine, make_offer, bom_criteria, two_adults, context_id):
    session = await machine.select(context_id, bom_criteria, make_offer("LUX5STAR001"))

    with pytest.raises(InvalidSessionPhaseError):
        await machine.capture_details(session, two_adults)


async def test_lock_price_twice_is_rejected(machine, gateway, make_offer, bom_criteria, context_id):
    session = await machine.select(context_id, bom_criteria, make_offer("LUX5STAR001"))
    await machine.lock_price(session)

    with pytest.raises(InvalidSessionPhaseError):
        await machine.lock_price(session)
    assert len(gateway.calls_for("pre_book")) == 1


async def test_abandoned_session_cannot_commit(
    machine, gateway, session_store, make_offer, bom_criteria, two_adults, context_id
):
    session = await _ready_to_commit(machine, context_id, bom_criteria, make_offer("LUX5STAR001"), two_adults)

    await machine.abandon(session)

    assert session.phase == SessionPhase.IDLE
    assert await session_store.get(context_id) is None
    with pytest.raises(InvalidSessionPhaseError):
        await machine.commit(session)
    assert gateway.calls_for("book") == []


# === Price lock failures ===


async def test_unavailable_room_fails_the_session(machine, session_store, make_offer, bom_criteria, context_id):
    session = await machine.select(context_id, bom_criteria, make_offer("RESORT5STAR001-UNAVAILABLE"))

    with pytest.raises(InventoryUnavailableError):
        await machine.lock_price(session)

    assert session.phase == SessionPhase.FAILED
    assert session.last_error_code == "INVENTORY_UNAVAILABLE"
    assert (await session_store.get(context_id))["phase"] == SessionPhase.FAILED.value


async def test_transient_lock_failure_keeps_session_selected(machine, gateway, make_offer, bom_criteria, context_id):
    session = await machine.select(context_id, bom_criteria, make_offer("LUX5STAR001"))
    gateway.queue_result("pre_book", SupplierResult.failure("TIMEOUT", "Request timed out"))

    with pytest.raises(SupplierTimeoutError):
        await machine.lock_price(session)
    assert session.phase == SessionPhase.SELECTED

    await machine.lock_price(session)
    assert session.phase == SessionPhase.PRICE_LOCKED


async def test_supplier_outage_on_lock_keeps_session_selected(
    machine, gateway, make_offer, bom_criteria, context_id
):
    session = await machine.select(context_id, bom_criteria, make_offer("LUX5STAR001"))
    gateway.queue_result(
        "pre_book", SupplierResult.failure("HTTP_503", "Service Unavailable", 503, {"Message": "Service Unavailable"})
    )

    with pytest.raises(SupplierError):
        await machine.lock_price(session)

    assert session.phase == SessionPhase.SELECTED


# === Commit failures ===


async def test_rejected_commit_fails_definitely(machine, gateway, make_offer, bom_criteria, two_adults, context_id):
    session = await _ready_to_commit(
        machine, context_id, bom_criteria, make_offer("LUX5STAR001-FAIL"), two_adults
    )

    with pytest.raises(CommitFailedError):
        await machine.commit(session)

    assert session.phase == SessionPhase.FAILED
    assert session.commit_outcome_unknown is False
    assert session.last_error_code == "COMMIT_FAILED"
    assert len(gateway.calls_for("book")) == 1

    await machine.restart(session)
    assert session.phase == SessionPhase.SELECTED
    assert session.idempotency_key == "idem-test-000002"
    assert session.price_lock is None


async def test_open_circuit_on_commit_is_definite(machine, gateway, make_offer, bom_criteria, two_adults, context_id):
    session = await _ready_to_commit(machine, context_id, bom_criteria, make_offer("LUX5STAR001"), two_adults)
    gateway.queue_result("book", SupplierResult.failure("CIRCUIT_OPEN", "Circuit breaker is open"))

    with pytest.raises(CommitFailedError):
        await machine.commit(session)
    assert session.commit_outcome_unknown is False


async def test_timed_out_commit_is_resolved_by_resume(
    machine, session_store, booking_repo, make_offer, bom_criteria, two_adults, context_id
):
    session = await _ready_to_commit(
        machine, context_id, bom_criteria, make_offer("AIRPORT3STAR001-TIMEOUT"), two_adults
    )

    with pytest.raises(CommitUnknownError) as exc_info:
        await machine.commit(session)

    assert exc_info.value.retryable is False
    assert session.phase == SessionPhase.FAILED
    assert session.commit_outcome_unknown is True
    assert session.booking_reference_id == "BOOK-TEST-0001"

    with pytest.raises(CommitUnknownError):
        await machine.restart(session)

    booking = await machine.resume(session)

    assert booking is not None
    assert booking.confirmation_number == "CONF-STUB-000001"
    assert booking.booking_reference_id == "BOOK-TEST-0001"
    assert session.phase == SessionPhase.COMMITTED
    assert await session_store.get(context_id) is None
    assert await booking_repo.get_by_booking_reference_id("BOOK-TEST-0001") is not None


async def test_lost_commit_resumes_as_not_booked(machine, gateway, make_offer, bom_criteria, two_adults, context_id):
    session = await _ready_to_commit(machine, context_id, bom_criteria, make_offer("LUX5STAR001"), two_adults)
    gateway.queue_result("book", SupplierResult.failure("NETWORK_ERROR", "Connection reset by peer"))

    with pytest.raises(CommitUnknownError):
        await machine.commit(session)

    assert await machine.resume(session) is None
    assert session.phase == SessionPhase.FAILED
    assert session.commit_outcome_unknown is False

    await machine.restart(session)
    assert session.phase == SessionPhase.SELECTED
    assert session.idempotency_key != "idem-test-000001"


async def test_server_error_on_commit_is_ambiguous(machine, gateway, make_offer, bom_criteria, two_adults, context_id):
    session = await _ready_to_commit(machine, context_id, bom_criteria, make_offer("LUX5STAR001"), two_adults)
    gateway.queue_result("book", SupplierResult.failure("HTTP_502", "Bad Gateway", 502))

    with pytest.raises(CommitUnknownError):
        await machine.commit(session)
    assert session.commit_outcome_unknown is True


async def test_success_without_confirmation_number_is_ambiguous(
    machine, gateway, make_offer, bom_criteria, two_adults, context_id
):
    session = await _ready_to_commit(machine, context_id, bom_criteria, make_offer("LUX5STAR001"), two_adults)
    gateway.queue_result("book", SupplierResult.success({"Status": 1, "Message": "Processing"}))

    with pytest.raises(CommitUnknownError):
        await machine.commit(session)
    assert session.commit_outcome_unknown is True


async def test_unreadable_booking_confirmation_is_ambiguous(
    machine, gateway, make_offer, bom_criteria, two_adults, context_id
):
    session = await _ready_to_commit(machine, context_id, bom_criteria, make_offer("LUX5STAR001"), two_adults)
    gateway.queue_result("book", SupplierResult.success({"Status": 1, "ConfirmationNo": "C-1", "BookingId": "BK-77"}))

    with pytest.raises(CommitUnknownError):
        await machine.commit(session)

    stored = await machine.current(context_id)
    assert stored.phase == SessionPhase.FAILED
    assert stored.commit_outcome_unknown is True
    assert stored.booking_reference_id == "BOOK-TEST-0001"

    with pytest.raises(InvalidSessionPhaseError):
        await machine.commit(stored)
    assert len(gateway.calls_for("book")) == 1


async def test_interrupted_commit_is_never_resent(
    machine, gateway, session_store, make_offer, bom_criteria, two_adults, context_id
):
    session = await _ready_to_commit(machine, context_id, bom_criteria, make_offer("LUX5STAR001"), two_adults)
    snapshot = session.to_snapshot()
    snapshot["commit_attempted"] = True
    snapshot["booking_reference_id"] = "BOOK-TEST-0009"
    await session_store.put(context_id, snapshot)

    stored = await machine.current(context_id)
    with pytest.raises(CommitUnknownError):
        await machine.commit(stored)

    assert gateway.calls_for("book") == []
    assert stored.phase == SessionPhase.FAILED
    assert stored.commit_outcome_unknown is True
    assert (await machine.current(context_id)).commit_outcome_unknown is True


async def test_resume_requires_unknown_outcome(machine, make_offer, bom_criteria, context_id):
    session = await machine.select(context_id, bom_criteria, make_offer("LUX5STAR001"))

    with pytest.raises(InvalidSessionPhaseError):
        await machine.resume(session)


# === Concurrency ===


async def test_overlapping_transitions_are_rejected(machine, gateway, make_offer, bom_criteria, context_id):
    session = await machine.select(context_id, bom_criteria, make_offer("LUX5STAR001"))
    gate = gateway.block("pre_book")

    in_flight = asyncio.create_task(machine.lock_price(session))
    while not gateway.calls_for("pre_book"):
        await asyncio.sleep(0)

    with pytest.raises(SessionBusyError):
        await machine.lock_price(session)

    rehydrated = await machine.current(context_id)
    with pytest.raises(SessionBusyError):
        await machine.abandon(rehydrated)

    with pytest.raises(SessionBusyError):
        await machine.select(context_id, bom_criteria, make_offer("BTQ4STAR001"))

    gate.set()
    await in_flight

    assert session.phase == SessionPhase.PRICE_LOCKED
    assert len(gateway.calls_for("pre_book")) == 1


# === Lookup and expiry ===


async def test_rehydrated_session_matches_the_stored_one(
    machine, make_offer, bom_criteria, two_adults, context_id
):
    session = await machine.select(context_id, bom_criteria, make_offer("BUS4STAR001-PRICECHANGE"))
    await machine.lock_price(session)
    await machine.capture_details(session, two_adults)

    rehydrated = await machine.current(context_id)

    assert rehydrated == session
    assert rehydrated.has_unacknowledged_change is True


async def test_selecting_again_replaces_the_session(machine, make_offer, bom_criteria, context_id):
    first = await machine.select(context_id, bom_criteria, make_offer("LUX5STAR001"))
    second = await machine.select(context_id, bom_criteria, make_offer("BTQ4STAR001"))

    current = await machine.current(context_id)
    assert current.session_id == second.session_id
    assert current.session_id != first.session_id
    assert current.original_booking_code == "BTQ4STAR001"


async def test_unknown_context_has_no_session(machine):
    with pytest.raises(SessionNotFoundError):
        await machine.current("ctx-unknown")


async def test_inactive_session_expires(machine, clock, session_store, make_offer, bom_criteria, context_id):
    await machine.select(context_id, bom_criteria, make_offer("LUX5STAR001"))

    clock.advance(minutes=29)
    assert (await machine.active(context_id)).phase == SessionPhase.SELECTED

    clock.advance(minutes=2)
    with pytest.raises(SessionExpiredError):
        await machine.active(context_id)

    assert await session_store.get(context_id) is None
    with pytest.raises(SessionNotFoundError):
        await machine.current(context_id)


# === Input validation ===


async def test_select_rejects_invalid_criteria(machine, make_offer, context_id):
    criteria = SearchCriteria(
        check_in=date(2024, 3, 18),
        check_out=date(2024, 3, 18),
        guest_nationality="IN",
        rooms=(RoomRequest(adults=2),),
        city_code="BOM",
    )

    with pytest.raises(ValidationError):
        await machine.select(context_id, criteria, make_offer("LUX5STAR001"))


async def test_select_rejects_sample_offers(machine, make_offer, bom_criteria, context_id):
    sample = replace(make_offer("LUX5STAR001"), is_fallback=True)

    with pytest.raises(ValidationError):
        await machine.select(context_id, bom_criteria, sample)


async def test_guest_roster_must_match_rooms(machine, make_offer, bom_criteria, context_id):
    session = await machine.select(context_id, bom_criteria, make_offer("LUX5STAR001"))
    await machine.lock_price(session)
    one_adult = CustomerDetails(
        rooms=(RoomGuests(guests=(Guest(title="Mr", first_name="John", last_name="Doe"),)),)
    )

    with pytest.raises(ValidationError):
        await machine.capture_details(session, one_adult)
    assert session.phase == SessionPhase.PRICE_LOCKED


async def test_children_must_be_listed_as_children(machine, make_offer, context_id):
    criteria = SearchCriteria(
        check_in=date(2024, 3, 15),
        check_out=date(2024, 3, 18),
        guest_nationality="IN",
        rooms=(RoomRequest(adults=1, children=1, children_ages=(7,)),),
        city_code="BOM",
    )
    session = await machine.select(context_id, criteria, make_offer("LUX5STAR001"))
    await machine.lock_price(session)

    two_adults = CustomerDetails(
        rooms=(
            RoomGuests(
                guests=(
                    Guest(title="Mr", first_name="John", last_name="Doe"),
                    Guest(title="Mrs", first_name="Jane", last_name="Doe"),
                )
            ),
        )
    )
    with pytest.raises(ValidationError):
        await machine.capture_details(session, two_adults)

    family = CustomerDetails(
        rooms=(
            RoomGuests(
                guests=(
                    Guest(title="Mr", first_name="John", last_name="Doe"),
                    Guest(title="Master", first_name="Sam", last_name="Doe", guest_type=GuestType.CHILD),
                )
            ),
        )
    )
    await machine.capture_details(session, family)
    assert session.phase == SessionPhase.DETAILS_CAPTURED
