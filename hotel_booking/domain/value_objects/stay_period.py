"""Value Object StayPeriod - check-in / check-out calendar dates."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class StayPeriod:
    """
    Immutable stay window.

    Attributes:
        check_in: Arrival date.
        check_out: Departure date, strictly after check_in.
    """

    check_in: date
    check_out: date

    def __post_init__(self) -> None:
        if self.check_in >= self.check_out:
            raise ValueError(
                f"check_in must be before check_out: {self.check_in} >= {self.check_out}"
            )

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    def intersects(self, start: date, end: date) -> bool:
        """
        True if the stay shares at least one calendar day with [start, end].

        Both ends are inclusive, departure day included: a stay checking out
        on `start` still intersects.
        """
        return self.check_in <= end and start <= self.check_out

    def __str__(self) -> str:
        return f"{self.check_in.isoformat()} -> {self.check_out.isoformat()}"
