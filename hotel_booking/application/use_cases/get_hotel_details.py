"""Hotel details lookup with a per-hotel cache."""

import logging
from datetime import datetime, timedelta

from hotel_booking.application import supplier_mapping
from hotel_booking.application.interfaces.clock import Clock
from hotel_booking.application.interfaces.hotel_supplier_gateway import HotelSupplierGateway
from hotel_booking.domain.entities.hotel import HotelDetails
from hotel_booking.domain.errors import ValidationError

logger = logging.getLogger(__name__)


class GetHotelDetailsUseCase:
    """
    Fetch descriptive details for one or more hotels.

    Details do not carry prices, so they are cached per hotel code for
    cache_ttl; only codes missing from the cache hit the supplier.
    """

    def __init__(
        self,
        gateway: HotelSupplierGateway,
        clock: Clock,
        cache_ttl: timedelta = timedelta(minutes=30),
        language: str = "en",
    ):
        self._gateway = gateway
        self._clock = clock
        self._cache_ttl = cache_ttl
        self._language = language
        self._cache: dict[str, tuple[HotelDetails, datetime]] = {}

    async def execute(self, hotel_codes: list[str]) -> list[HotelDetails]:
        codes = [code.strip() for code in hotel_codes if code and code.strip()]
        if not codes:
            raise ValidationError("hotel_codes", "At least one hotel code is required")

        now = self._clock.now()
        missing = [code for code in dict.fromkeys(codes) if self._cached(code, now) is None]

        if missing:
            result = await self._gateway.hotel_details(
                supplier_mapping.to_hotel_details_request(missing, language=self._language)
            )
            if not result.ok:
                logger.error(
                    "Hotel details lookup failed",
                    extra={"hotel_codes": missing, "error_code": result.error_code},
                )
                raise supplier_mapping.map_supplier_error("hotel_details", result)
            for details in supplier_mapping.hotel_details_from_response(result.payload):
                self._cache[details.hotel_code] = (details, now)

        found = []
        for code in dict.fromkeys(codes):
            cached = self._cached(code, now)
            if cached is not None:
                found.append(cached)
        return found

    def clear_cache(self) -> None:
        self._cache.clear()

    def _cached(self, hotel_code: str, now: datetime) -> HotelDetails | None:
        entry = self._cache.get(hotel_code)
        if entry is None:
            return None
        details, fetched_at = entry
        if now - fetched_at > self._cache_ttl:
            del self._cache[hotel_code]
            return None
        return details
