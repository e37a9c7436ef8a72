"""Hotel search plus client-side filtering and sorting."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Callable, Iterable

from hotel_booking.application import supplier_mapping
from hotel_booking.application.interfaces.clock import Clock
from hotel_booking.application.interfaces.hotel_supplier_gateway import HotelSupplierGateway
from hotel_booking.domain.entities.hotel import HotelResult
from hotel_booking.domain.entities.search_criteria import SearchCriteria

logger = logging.getLogger(__name__)

FallbackCatalog = Callable[[SearchCriteria], list[HotelResult]]


class MealPlan(IntEnum):
    ROOM_ONLY = 1
    BREAKFAST = 2
    HALF_BOARD = 3
    FULL_BOARD = 4
    ALL_INCLUSIVE = 5


class SortKey(str, Enum):
    PRICE = "price"
    STAR_RATING = "star_rating"
    NAME = "name"


def matches_meal_plan(meal_type: str, meal_plan: MealPlan | int) -> bool:
    """Match the supplier's free-text meal type against a meal-plan code."""
    text = (meal_type or "").strip().lower()
    if meal_plan == MealPlan.ROOM_ONLY:
        return "room only" in text or text == "ro"
    if meal_plan == MealPlan.BREAKFAST:
        return "breakfast" in text and "board" not in text
    if meal_plan == MealPlan.HALF_BOARD:
        return "half board" in text or text == "hb"
    if meal_plan == MealPlan.FULL_BOARD:
        return "full board" in text or text == "fb"
    if meal_plan == MealPlan.ALL_INCLUSIVE:
        return "all inclusive" in text or text == "ai"
    # Unknown code: no filtering
    return True


@dataclass(frozen=True)
class HotelFilters:
    """Every field is optional; None means 'do not filter on this'."""

    star_rating: int | None = None
    refundable: bool | None = None
    meal_plan: MealPlan | None = None
    max_price: Decimal | None = None
    hotel_name: str | None = None
    min_available_rooms: int | None = None

    def accepts(self, hotel: HotelResult) -> bool:
        if self.star_rating is not None and hotel.star_rating != self.star_rating:
            return False
        if self.refundable is not None and hotel.refundable != self.refundable:
            return False
        if self.meal_plan is not None and not matches_meal_plan(hotel.meal_type, self.meal_plan):
            return False
        if self.max_price is not None and hotel.price.offered_price > self.max_price:
            return False
        if self.hotel_name and self.hotel_name.lower() not in hotel.hotel_name.lower():
            return False
        if self.min_available_rooms is not None and hotel.available_rooms < self.min_available_rooms:
            return False
        return True


def filter_results(results: Iterable[HotelResult], filters: HotelFilters) -> list[HotelResult]:
    """Pure and order-preserving; applying the same filters twice changes nothing."""
    return [hotel for hotel in results if filters.accepts(hotel)]


def sort_results(results: Iterable[HotelResult], key: SortKey | str) -> list[HotelResult]:
    """Stable sort: price ascending, star rating descending, or name A-Z."""
    sort_key = SortKey(key)
    hotels = list(results)
    if sort_key == SortKey.PRICE:
        return sorted(hotels, key=lambda hotel: hotel.price.offered_price)
    if sort_key == SortKey.STAR_RATING:
        return sorted(hotels, key=lambda hotel: hotel.star_rating, reverse=True)
    return sorted(hotels, key=lambda hotel: hotel.hotel_name.lower())


@dataclass(frozen=True)
class HotelSearchResult:
    hotels: list[HotelResult]
    criteria: SearchCriteria
    is_fallback: bool = False
    message: str | None = None
    total_results: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "total_results", len(self.hotels))


class SearchHotelsUseCase:
    """
    Run a hotel search against the supplier.

    Criteria are validated before any network call. When the supplier is
    unreachable (transport failure or open circuit) and a fallback catalog
    is configured, deterministic degraded results are returned instead,
    flagged is_fallback. Supplier rejections are raised, never masked.
    """

    def __init__(
        self,
        gateway: HotelSupplierGateway,
        clock: Clock,
        fallback_catalog: FallbackCatalog | None = None,
        timeout_seconds: float | None = None,
    ):
        self._gateway = gateway
        self._clock = clock
        self._fallback_catalog = fallback_catalog
        self._timeout_seconds = timeout_seconds

    async def execute(self, criteria: SearchCriteria) -> HotelSearchResult:
        criteria.validate(today=self._clock.today().date())

        result = await self._gateway.search(supplier_mapping.to_search_request(criteria))
        if result.ok:
            hotels = supplier_mapping.hotels_from_search_response(result.payload)
            logger.info(
                "Hotel search completed",
                extra={
                    "city_code": criteria.city_code,
                    "hotel_count": len(hotels),
                    "check_in": criteria.check_in.isoformat(),
                },
            )
            return HotelSearchResult(hotels=hotels, criteria=criteria)

        if supplier_mapping.is_transport_failure(result) and self._fallback_catalog is not None:
            logger.warning(
                "Hotel search unavailable, serving fallback results",
                extra={"city_code": criteria.city_code, "error_code": result.error_code},
            )
            return HotelSearchResult(
                hotels=self._fallback_catalog(criteria),
                criteria=criteria,
                is_fallback=True,
                message="Live availability is temporarily unavailable. Showing sample results.",
            )

        logger.error(
            "Hotel search failed",
            extra={"city_code": criteria.city_code, "error_code": result.error_code},
        )
        raise supplier_mapping.map_supplier_error("search", result, timeout_seconds=self._timeout_seconds)
