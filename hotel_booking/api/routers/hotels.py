from fastapi import APIRouter, Depends, status

from hotel_booking.api.deps import get_use_cases
from hotel_booking.api.schemas.hotels import (
    HotelDetailsRequest,
    HotelDetailsResponse,
    HotelDetailsSchema,
    SearchHotelsRequest,
    SearchHotelsResponse,
)
from hotel_booking.application.use_cases.search_hotels import HotelFilters, filter_results, sort_results

router = APIRouter()


@router.post(
    "/hotels/search",
    response_model=SearchHotelsResponse,
    status_code=status.HTTP_200_OK,
)
async def search_hotels(
    payload: SearchHotelsRequest,
    use_cases=Depends(get_use_cases),
) -> SearchHotelsResponse:
    result = await use_cases["search_hotels"].execute(payload.to_domain())
    filters = payload.filters.to_domain() if payload.filters else HotelFilters()
    hotels = filter_results(result.hotels, filters)
    if payload.sort_by:
        hotels = sort_results(hotels, payload.sort_by)
    return SearchHotelsResponse.from_result(result, hotels)


@router.post(
    "/hotels/details",
    response_model=HotelDetailsResponse,
    status_code=status.HTTP_200_OK,
)
async def hotel_details(
    payload: HotelDetailsRequest,
    use_cases=Depends(get_use_cases),
) -> HotelDetailsResponse:
    details = await use_cases["hotel_details"].execute(payload.hotel_codes)
    return HotelDetailsResponse(hotels=[HotelDetailsSchema.from_domain(item) for item in details])
