from fastapi import APIRouter, Depends, Query, status

from hotel_booking.api.deps import get_use_cases
from hotel_booking.api.schemas.bookings import (
    BookingListResponse,
    CancellationResponse,
    CommittedBookingResponse,
)

router = APIRouter()


@router.get(
    "/bookings",
    response_model=CommittedBookingResponse,
    status_code=status.HTTP_200_OK,
)
async def get_booking(
    confirmation_number: str | None = Query(default=None),
    booking_reference_id: str | None = Query(default=None),
    use_cases=Depends(get_use_cases),
) -> CommittedBookingResponse:
    booking = await use_cases["booking_management"].get_booking_details(
        confirmation_number=confirmation_number,
        booking_reference_id=booking_reference_id,
    )
    return CommittedBookingResponse.from_domain(booking)


@router.get(
    "/bookings/by-date",
    response_model=BookingListResponse,
    status_code=status.HTTP_200_OK,
)
async def get_bookings_by_date(
    from_date: str = Query(...),
    to_date: str = Query(...),
    use_cases=Depends(get_use_cases),
) -> BookingListResponse:
    # Raw strings: the service owns date validation
    result = await use_cases["booking_management"].get_bookings_by_date_range(from_date, to_date)
    return BookingListResponse.from_domain(result)


@router.post(
    "/bookings/{confirmation_number}/cancel",
    response_model=CancellationResponse,
    status_code=status.HTTP_200_OK,
)
async def cancel_booking(
    confirmation_number: str,
    use_cases=Depends(get_use_cases),
) -> CancellationResponse:
    outcome = await use_cases["booking_management"].cancel_booking(confirmation_number)
    return CancellationResponse.from_domain(outcome)
