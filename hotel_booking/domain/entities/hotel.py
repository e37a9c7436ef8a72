"""Hotel offers and descriptive hotel details."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from hotel_booking.domain.value_objects.money import Money


@dataclass(frozen=True)
class HotelPrice:
    """Price breakdown of an offer, all amounts in `currency`."""

    currency: str
    offered_price: Decimal
    published_price: Decimal
    room_price: Decimal = Decimal("0")
    tax: Decimal = Decimal("0")
    extra_guest_charge: Decimal = Decimal("0")
    child_charge: Decimal = Decimal("0")
    other_charges: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")
    agent_commission: Decimal = Decimal("0")
    agent_mark_up: Decimal = Decimal("0")

    @property
    def offered(self) -> Money:
        return Money(amount=self.offered_price, currency_code=self.currency)

    def to_dict(self) -> dict[str, Any]:
        return {
            "currency": self.currency,
            "offered_price": str(self.offered_price),
            "published_price": str(self.published_price),
            "room_price": str(self.room_price),
            "tax": str(self.tax),
            "extra_guest_charge": str(self.extra_guest_charge),
            "child_charge": str(self.child_charge),
            "other_charges": str(self.other_charges),
            "discount": str(self.discount),
            "agent_commission": str(self.agent_commission),
            "agent_mark_up": str(self.agent_mark_up),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HotelPrice":
        decimals = {key: Decimal(value) for key, value in data.items() if key != "currency"}
        return cls(currency=data["currency"], **decimals)


@dataclass(frozen=True)
class HotelResult:
    """
    A price-bearing offer returned by a supplier search.

    booking_code is an opaque supplier token: it is echoed back verbatim
    and never inspected.
    """

    booking_code: str
    hotel_code: str
    hotel_name: str
    star_rating: int
    price: HotelPrice
    refundable: bool
    address: str = ""
    contact_number: str = ""
    city_name: str = ""
    country_name: str = ""
    meal_type: str = ""
    room_type: str = ""
    available_rooms: int = 0
    amenities: tuple[str, ...] = field(default_factory=tuple)
    hotel_picture: str = ""
    hotel_images: tuple[str, ...] = field(default_factory=tuple)
    cancellation_policy: str | None = None
    is_fallback: bool = False

    def __post_init__(self) -> None:
        for name in ("amenities", "hotel_images"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))

    def to_dict(self) -> dict[str, Any]:
        return {
            "booking_code": self.booking_code,
            "hotel_code": self.hotel_code,
            "hotel_name": self.hotel_name,
            "star_rating": self.star_rating,
            "price": self.price.to_dict(),
            "refundable": self.refundable,
            "address": self.address,
            "contact_number": self.contact_number,
            "city_name": self.city_name,
            "country_name": self.country_name,
            "meal_type": self.meal_type,
            "room_type": self.room_type,
            "available_rooms": self.available_rooms,
            "amenities": list(self.amenities),
            "hotel_picture": self.hotel_picture,
            "hotel_images": list(self.hotel_images),
            "cancellation_policy": self.cancellation_policy,
            "is_fallback": self.is_fallback,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HotelResult":
        values = dict(data)
        values["price"] = HotelPrice.from_dict(data["price"])
        values["amenities"] = tuple(data.get("amenities") or ())
        values["hotel_images"] = tuple(data.get("hotel_images") or ())
        return cls(**values)


@dataclass(frozen=True)
class HotelDetails:
    """Descriptive, non-priced information about a hotel."""

    hotel_code: str
    hotel_name: str
    star_rating: int
    description: str = ""
    facilities: tuple[str, ...] = ()
    attractions: tuple[tuple[str, str], ...] = ()
    check_in_time: str = ""
    check_out_time: str = ""
    cancellation_policy: str = ""
    images: tuple[str, ...] = ()
    address: str = ""
    pin_code: str = ""
    city_name: str = ""
    country_name: str = ""
    phone_number: str = ""
    fax_number: str = ""
    latitude: float | None = None
    longitude: float | None = None
