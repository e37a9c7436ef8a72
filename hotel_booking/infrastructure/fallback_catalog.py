"""
Degraded search results served while the supplier is unreachable.

The catalog is deterministic: the same criteria always produce the same
hotels. Every result is flagged is_fallback and cannot be booked.
"""

from decimal import Decimal

from hotel_booking.domain.entities.hotel import HotelPrice, HotelResult
from hotel_booking.domain.entities.search_criteria import SearchCriteria

# name, stars, nightly price (USD), meal type, refundable
_TEMPLATES = (
    ("Central Plaza Hotel", 4, Decimal("150"), "Breakfast Included", True),
    ("Harbour View Inn", 3, Decimal("95"), "Room Only", False),
    ("Royal Garden Resort", 5, Decimal("260"), "Half Board", True),
)


def build_fallback_hotels(criteria: SearchCriteria) -> list[HotelResult]:
    location = (criteria.city_code or ",".join(criteria.hotel_codes) or "ANY").upper()
    nights = max(criteria.stay.nights, 1)
    rooms = max(len(criteria.rooms), 1)

    hotels = []
    for index, (name, stars, nightly, meal_type, refundable) in enumerate(_TEMPLATES, start=1):
        total = nightly * nights * rooms
        hotels.append(
            HotelResult(
                booking_code=f"FALLBACK-{location}-{index}",
                hotel_code=f"FALLBACK-{location}-{index}",
                hotel_name=name,
                star_rating=stars,
                price=HotelPrice(currency="USD", offered_price=total, published_price=total, room_price=total),
                refundable=refundable,
                meal_type=meal_type,
                available_rooms=0,
                is_fallback=True,
            )
        )
    return hotels
