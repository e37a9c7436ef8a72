from fastapi import APIRouter, Body, Depends, Response, status

from hotel_booking.api.deps import get_use_cases
from hotel_booking.api.schemas.bookings import CommittedBookingResponse
from hotel_booking.api.schemas.sessions import (
    CaptureGuestsRequest,
    CommitRequest,
    ResumeResponse,
    SessionResponse,
    StartSessionRequest,
)

router = APIRouter()


@router.post(
    "/sessions",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def start_session(
    payload: StartSessionRequest,
    use_cases=Depends(get_use_cases),
) -> SessionResponse:
    session = await use_cases["session_machine"].select(
        payload.context_id, payload.criteria.to_domain(), payload.hotel.to_domain()
    )
    return SessionResponse.from_domain(session)


@router.get(
    "/sessions/{context_id}",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
)
async def get_session(context_id: str, use_cases=Depends(get_use_cases)) -> SessionResponse:
    session = await use_cases["session_machine"].active(context_id)
    return SessionResponse.from_domain(session)


@router.post(
    "/sessions/{context_id}/lock-price",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
)
async def lock_price(context_id: str, use_cases=Depends(get_use_cases)) -> SessionResponse:
    machine = use_cases["session_machine"]
    session = await machine.active(context_id)
    return SessionResponse.from_domain(await machine.lock_price(session))


@router.post(
    "/sessions/{context_id}/acknowledge-price-change",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
)
async def acknowledge_price_change(context_id: str, use_cases=Depends(get_use_cases)) -> SessionResponse:
    machine = use_cases["session_machine"]
    session = await machine.active(context_id)
    return SessionResponse.from_domain(await machine.acknowledge_price_change(session))


@router.put(
    "/sessions/{context_id}/guests",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
)
async def capture_guests(
    context_id: str,
    payload: CaptureGuestsRequest,
    use_cases=Depends(get_use_cases),
) -> SessionResponse:
    machine = use_cases["session_machine"]
    session = await machine.active(context_id)
    return SessionResponse.from_domain(await machine.capture_details(session, payload.to_domain()))


@router.post(
    "/sessions/{context_id}/commit",
    response_model=CommittedBookingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def commit(
    context_id: str,
    payload: CommitRequest | None = Body(default=None),
    use_cases=Depends(get_use_cases),
) -> CommittedBookingResponse:
    machine = use_cases["session_machine"]
    session = await machine.active(context_id)
    booking = await machine.commit(session, contact=payload.to_domain() if payload else None)
    return CommittedBookingResponse.from_domain(booking)


@router.post(
    "/sessions/{context_id}/resume",
    response_model=ResumeResponse,
    status_code=status.HTTP_200_OK,
)
async def resume(context_id: str, use_cases=Depends(get_use_cases)) -> ResumeResponse:
    machine = use_cases["session_machine"]
    session = await machine.current(context_id)
    booking = await machine.resume(session)
    return ResumeResponse(
        booked=booking is not None,
        booking=CommittedBookingResponse.from_domain(booking) if booking else None,
        session=SessionResponse.from_domain(session),
    )


@router.post(
    "/sessions/{context_id}/restart",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
)
async def restart(context_id: str, use_cases=Depends(get_use_cases)) -> SessionResponse:
    machine = use_cases["session_machine"]
    session = await machine.current(context_id)
    return SessionResponse.from_domain(await machine.restart(session))


@router.delete("/sessions/{context_id}", status_code=status.HTTP_204_NO_CONTENT)
async def abandon(context_id: str, use_cases=Depends(get_use_cases)) -> Response:
    machine = use_cases["session_machine"]
    session = await machine.current(context_id)
    await machine.abandon(session)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
