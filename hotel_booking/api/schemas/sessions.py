from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, EmailStr, constr

from hotel_booking.api.schemas.bookings import CommittedBookingResponse, GuestSchema
from hotel_booking.api.schemas.hotels import HotelResultSchema, SearchCriteriaSchema
from hotel_booking.domain.entities.booking_session import BookingSession, SessionPhase
from hotel_booking.domain.entities.customer import ContactInfo, CustomerDetails, Guest, RoomGuests
from hotel_booking.domain.entities.price_lock import Reconciliation


class StartSessionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    context_id: constr(strip_whitespace=True, min_length=1)
    criteria: SearchCriteriaSchema
    hotel: HotelResultSchema


class RoomGuestsRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    guests: list[GuestSchema]


class CaptureGuestsRequest(BaseModel):
    """Guests per room, in the same order as the searched rooms."""

    model_config = ConfigDict(extra="forbid")

    rooms: list[RoomGuestsRequest]

    def to_domain(self) -> CustomerDetails:
        return CustomerDetails(
            rooms=tuple(
                RoomGuests(
                    guests=tuple(
                        Guest(
                            title=guest.title,
                            first_name=guest.first_name,
                            last_name=guest.last_name,
                            guest_type=guest.guest_type,
                        )
                        for guest in room.guests
                    )
                )
                for room in self.rooms
            )
        )


class CommitRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr | None = None
    phone_number: str | None = None

    def to_domain(self) -> ContactInfo:
        return ContactInfo(email=self.email or "", phone_number=self.phone_number or "")


class ReconciliationResponse(BaseModel):
    old_price: Decimal
    old_currency: str
    new_price: Decimal
    new_currency: str
    price_difference: Decimal | None = None
    old_refundable: bool
    new_refundable: bool
    old_cancellation_policy: str | None = None
    new_cancellation_policy: str | None = None
    price_changed: bool
    policy_changed: bool

    @classmethod
    def from_domain(cls, reconciliation: Reconciliation) -> "ReconciliationResponse":
        return cls(
            old_price=reconciliation.old_price.amount,
            old_currency=reconciliation.old_price.currency_code,
            new_price=reconciliation.new_price.amount,
            new_currency=reconciliation.new_price.currency_code,
            price_difference=reconciliation.price_difference,
            old_refundable=reconciliation.old_refundable,
            new_refundable=reconciliation.new_refundable,
            old_cancellation_policy=reconciliation.old_cancellation_policy,
            new_cancellation_policy=reconciliation.new_cancellation_policy,
            price_changed=reconciliation.price_changed,
            policy_changed=reconciliation.policy_changed,
        )


class SessionResponse(BaseModel):
    session_id: str
    context_id: str
    phase: SessionPhase
    hotel: HotelResultSchema
    booking_code: str
    locked_booking_code: str | None = None
    locked_price: Decimal | None = None
    currency: str | None = None
    price_or_policy_changed: bool
    price_change_acknowledged: bool
    reconciliation: ReconciliationResponse | None = None
    commit_outcome_unknown: bool
    confirmation_number: str | None = None
    booking_reference_id: str | None = None
    last_error_code: str | None = None
    updated_at: datetime

    @classmethod
    def from_domain(cls, session: BookingSession) -> "SessionResponse":
        price_lock = session.price_lock
        return cls(
            session_id=session.session_id,
            context_id=session.context_id,
            phase=session.phase,
            hotel=HotelResultSchema.from_domain(session.hotel),
            booking_code=session.original_booking_code,
            locked_booking_code=session.locked_booking_code,
            locked_price=price_lock.price.amount if price_lock else None,
            currency=price_lock.price.currency_code if price_lock else None,
            price_or_policy_changed=session.price_or_policy_changed,
            price_change_acknowledged=session.price_change_acknowledged,
            reconciliation=(
                ReconciliationResponse.from_domain(session.reconciliation) if session.reconciliation else None
            ),
            commit_outcome_unknown=session.commit_outcome_unknown,
            confirmation_number=session.confirmation_number,
            booking_reference_id=session.booking_reference_id,
            last_error_code=session.last_error_code,
            updated_at=session.updated_at,
        )


class ResumeResponse(BaseModel):
    booked: bool
    booking: CommittedBookingResponse | None = None
    session: SessionResponse
