"""Search criteria submitted by the user."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from hotel_booking.domain.errors import ValidationError
from hotel_booking.domain.value_objects.stay_period import StayPeriod

MAX_ROOMS = 9
MAX_ADULTS_PER_ROOM = 9
MAX_CHILDREN_PER_ROOM = 9
MAX_GUESTS_PER_ROOM = 9
MAX_CHILD_AGE = 17


@dataclass(frozen=True)
class RoomRequest:
    """Occupancy of one requested room."""

    adults: int
    children: int = 0
    children_ages: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.children_ages, tuple):
            object.__setattr__(self, "children_ages", tuple(self.children_ages))

    @property
    def total_guests(self) -> int:
        return self.adults + self.children

    def validate(self, room_number: int) -> None:
        field_name = f"rooms[{room_number - 1}]"
        if self.adults < 1:
            raise ValidationError(field_name, f"Room {room_number}: Each room must have at least one adult")
        if self.adults > MAX_ADULTS_PER_ROOM:
            raise ValidationError(field_name, f"Room {room_number}: Maximum {MAX_ADULTS_PER_ROOM} adults per room")
        if self.children < 0:
            raise ValidationError(field_name, f"Room {room_number}: Children count cannot be negative")
        if self.children > MAX_CHILDREN_PER_ROOM:
            raise ValidationError(
                field_name, f"Room {room_number}: Maximum {MAX_CHILDREN_PER_ROOM} children per room"
            )
        if len(self.children_ages) != self.children:
            raise ValidationError(
                field_name,
                f"Room {room_number}: Children ages must be provided for all {self.children} children "
                f"(received {len(self.children_ages)} ages)",
            )
        for index, age in enumerate(self.children_ages, start=1):
            if isinstance(age, bool) or not isinstance(age, int):
                raise ValidationError(field_name, f"Room {room_number}, Child {index}: Age must be a whole number")
            if age < 0:
                raise ValidationError(field_name, f"Room {room_number}, Child {index}: Age cannot be negative")
            if age > MAX_CHILD_AGE:
                raise ValidationError(
                    field_name,
                    f"Room {room_number}, Child {index}: Age must be {MAX_CHILD_AGE} or under (use adult for 18+)",
                )
        if self.total_guests > MAX_GUESTS_PER_ROOM:
            raise ValidationError(
                field_name,
                f"Room {room_number}: Maximum {MAX_GUESTS_PER_ROOM} guests per room "
                f"({self.adults} adults + {self.children} children = {self.total_guests})",
            )

    def to_dict(self) -> dict[str, Any]:
        return {"adults": self.adults, "children": self.children, "children_ages": list(self.children_ages)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RoomRequest":
        return cls(
            adults=data["adults"],
            children=data.get("children", 0),
            children_ages=tuple(data.get("children_ages") or ()),
        )


@dataclass(frozen=True)
class SearchCriteria:
    """
    Immutable search request.

    Either city_code or hotel_codes identifies where to search. Rooms keep
    the order in which the user entered them; guest details captured later
    are matched against that order.
    """

    check_in: date
    check_out: date
    guest_nationality: str
    rooms: tuple[RoomRequest, ...]
    city_code: str | None = None
    hotel_codes: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.rooms, tuple):
            object.__setattr__(self, "rooms", tuple(self.rooms))
        if not isinstance(self.hotel_codes, tuple):
            object.__setattr__(self, "hotel_codes", tuple(self.hotel_codes))

    @property
    def stay(self) -> StayPeriod:
        return StayPeriod(check_in=self.check_in, check_out=self.check_out)

    @property
    def total_guests(self) -> int:
        return sum(room.total_guests for room in self.rooms)

    def validate(self, today: date | None = None) -> None:
        """
        Raise ValidationError on the first structural problem.

        Args:
            today: When given, check-in dates before it are rejected.
        """
        if not self.check_in or not self.check_out:
            raise ValidationError("check_in", "Check-in and check-out dates are required")
        if today is not None and self.check_in < today:
            raise ValidationError("check_in", "Check-in date cannot be in the past")
        if self.check_out <= self.check_in:
            raise ValidationError("check_out", "Check-out date must be after check-in date")
        if not self.city_code and not self.hotel_codes:
            raise ValidationError("city_code", "Either hotel codes or city code is required")
        if not self.guest_nationality:
            raise ValidationError("guest_nationality", "Guest nationality is required")
        if not self.rooms:
            raise ValidationError("rooms", "At least one room is required")
        if len(self.rooms) > MAX_ROOMS:
            raise ValidationError("rooms", f"Maximum {MAX_ROOMS} rooms can be searched at once")
        for room_number, room in enumerate(self.rooms, start=1):
            room.validate(room_number)

    def to_dict(self) -> dict[str, Any]:
        return {
            "check_in": self.check_in.isoformat(),
            "check_out": self.check_out.isoformat(),
            "guest_nationality": self.guest_nationality,
            "rooms": [room.to_dict() for room in self.rooms],
            "city_code": self.city_code,
            "hotel_codes": list(self.hotel_codes),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchCriteria":
        return cls(
            check_in=date.fromisoformat(data["check_in"]),
            check_out=date.fromisoformat(data["check_out"]),
            guest_nationality=data["guest_nationality"],
            rooms=tuple(RoomRequest.from_dict(room) for room in data["rooms"]),
            city_code=data.get("city_code"),
            hotel_codes=tuple(data.get("hotel_codes") or ()),
        )
