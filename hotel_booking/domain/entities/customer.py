"""Guest details captured before commit."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class GuestType(str, Enum):
    ADULT = "Adult"
    CHILD = "Child"


@dataclass(frozen=True)
class Guest:
    title: str
    first_name: str
    last_name: str
    guest_type: GuestType = GuestType.ADULT

    @property
    def full_name(self) -> str:
        return f"{self.title} {self.first_name} {self.last_name}".strip()

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "guest_type": self.guest_type.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Guest":
        return cls(
            title=data["title"],
            first_name=data["first_name"],
            last_name=data["last_name"],
            guest_type=GuestType(data["guest_type"]),
        )


@dataclass(frozen=True)
class RoomGuests:
    """Ordered guest list of one room."""

    guests: tuple[Guest, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.guests, tuple):
            object.__setattr__(self, "guests", tuple(self.guests))

    @property
    def adult_count(self) -> int:
        return sum(1 for guest in self.guests if guest.guest_type == GuestType.ADULT)

    @property
    def child_count(self) -> int:
        return sum(1 for guest in self.guests if guest.guest_type == GuestType.CHILD)


@dataclass(frozen=True)
class CustomerDetails:
    """Guests per room, in the same order as the searched rooms."""

    rooms: tuple[RoomGuests, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.rooms, tuple):
            object.__setattr__(self, "rooms", tuple(self.rooms))

    @property
    def guest_count(self) -> int:
        return sum(len(room.guests) for room in self.rooms)

    def to_dict(self) -> dict[str, Any]:
        return {"rooms": [[guest.to_dict() for guest in room.guests] for room in self.rooms]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CustomerDetails":
        return cls(
            rooms=tuple(
                RoomGuests(guests=tuple(Guest.from_dict(guest) for guest in room))
                for room in data["rooms"]
            )
        )


@dataclass(frozen=True)
class ContactInfo:
    """Lead contact sent along with the booking."""

    email: str = ""
    phone_number: str = ""
