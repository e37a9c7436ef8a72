from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, constr

from hotel_booking.application.use_cases.search_hotels import HotelFilters, HotelSearchResult, MealPlan, SortKey
from hotel_booking.domain.entities.hotel import HotelDetails, HotelPrice, HotelResult
from hotel_booking.domain.entities.search_criteria import RoomRequest, SearchCriteria


class RoomRequestSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    adults: int
    children: int = 0
    children_ages: list[int] = Field(default_factory=list)


class SearchCriteriaSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    check_in: date
    check_out: date
    guest_nationality: constr(strip_whitespace=True, min_length=2, max_length=2)
    rooms: list[RoomRequestSchema]
    city_code: str | None = None
    hotel_codes: list[str] = Field(default_factory=list)

    def to_domain(self) -> SearchCriteria:
        return SearchCriteria(
            check_in=self.check_in,
            check_out=self.check_out,
            guest_nationality=self.guest_nationality.upper(),
            rooms=tuple(
                RoomRequest(adults=room.adults, children=room.children, children_ages=tuple(room.children_ages))
                for room in self.rooms
            ),
            city_code=self.city_code,
            hotel_codes=tuple(self.hotel_codes),
        )

    @classmethod
    def from_domain(cls, criteria: SearchCriteria) -> "SearchCriteriaSchema":
        return cls(
            check_in=criteria.check_in,
            check_out=criteria.check_out,
            guest_nationality=criteria.guest_nationality,
            rooms=[
                RoomRequestSchema(
                    adults=room.adults, children=room.children, children_ages=list(room.children_ages)
                )
                for room in criteria.rooms
            ],
            city_code=criteria.city_code,
            hotel_codes=list(criteria.hotel_codes),
        )


class HotelFiltersSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    star_rating: int | None = Field(default=None, ge=1, le=5)
    refundable: bool | None = None
    meal_plan: MealPlan | None = None
    max_price: Decimal | None = Field(default=None, ge=0)
    hotel_name: str | None = None
    min_available_rooms: int | None = Field(default=None, ge=0)

    def to_domain(self) -> HotelFilters:
        return HotelFilters(**self.model_dump())


class SearchHotelsRequest(SearchCriteriaSchema):
    filters: HotelFiltersSchema | None = None
    sort_by: SortKey | None = None


class HotelPriceSchema(BaseModel):
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


class HotelResultSchema(BaseModel):
    """A search offer; clients echo it back unchanged to start a booking."""

    model_config = ConfigDict(extra="ignore")

    booking_code: str
    hotel_code: str
    hotel_name: str
    star_rating: int
    price: HotelPriceSchema
    refundable: bool
    address: str = ""
    contact_number: str = ""
    city_name: str = ""
    country_name: str = ""
    meal_type: str = ""
    room_type: str = ""
    available_rooms: int = 0
    amenities: list[str] = Field(default_factory=list)
    hotel_picture: str = ""
    hotel_images: list[str] = Field(default_factory=list)
    cancellation_policy: str | None = None
    is_fallback: bool = False

    def to_domain(self) -> HotelResult:
        values = self.model_dump()
        values["price"] = HotelPrice(**values["price"])
        return HotelResult(**values)

    @classmethod
    def from_domain(cls, hotel: HotelResult) -> "HotelResultSchema":
        return cls(
            booking_code=hotel.booking_code,
            hotel_code=hotel.hotel_code,
            hotel_name=hotel.hotel_name,
            star_rating=hotel.star_rating,
            price=HotelPriceSchema(**vars(hotel.price)),
            refundable=hotel.refundable,
            address=hotel.address,
            contact_number=hotel.contact_number,
            city_name=hotel.city_name,
            country_name=hotel.country_name,
            meal_type=hotel.meal_type,
            room_type=hotel.room_type,
            available_rooms=hotel.available_rooms,
            amenities=list(hotel.amenities),
            hotel_picture=hotel.hotel_picture,
            hotel_images=list(hotel.hotel_images),
            cancellation_policy=hotel.cancellation_policy,
            is_fallback=hotel.is_fallback,
        )


class SearchHotelsResponse(BaseModel):
    hotels: list[HotelResultSchema]
    total_results: int
    is_fallback: bool
    message: str | None = None
    criteria: SearchCriteriaSchema

    @classmethod
    def from_result(cls, result: HotelSearchResult, hotels: list[HotelResult]) -> "SearchHotelsResponse":
        return cls(
            hotels=[HotelResultSchema.from_domain(hotel) for hotel in hotels],
            total_results=len(hotels),
            is_fallback=result.is_fallback,
            message=result.message,
            criteria=SearchCriteriaSchema.from_domain(result.criteria),
        )


class HotelDetailsRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    hotel_codes: list[str]


class AttractionSchema(BaseModel):
    name: str
    distance: str


class HotelDetailsSchema(BaseModel):
    hotel_code: str
    hotel_name: str
    star_rating: int
    description: str
    facilities: list[str]
    attractions: list[AttractionSchema]
    check_in_time: str
    check_out_time: str
    cancellation_policy: str
    images: list[str]
    address: str
    pin_code: str
    city_name: str
    country_name: str
    phone_number: str
    fax_number: str
    latitude: float | None = None
    longitude: float | None = None

    @classmethod
    def from_domain(cls, details: HotelDetails) -> "HotelDetailsSchema":
        values = dict(vars(details))
        values["facilities"] = list(details.facilities)
        values["images"] = list(details.images)
        values["attractions"] = [
            AttractionSchema(name=name, distance=distance) for name, distance in details.attractions
        ]
        return cls(**values)


class HotelDetailsResponse(BaseModel):
    hotels: list[HotelDetailsSchema]
