"""Value Object Money - an amount with its currency."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Money:
    """
    Immutable monetary amount.

    Attributes:
        amount: Decimal amount.
        currency_code: ISO 4217 currency code (e.g. USD, INR, EUR).
    """

    amount: Decimal
    currency_code: str

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))

        if len(self.currency_code) != 3:
            raise ValueError(f"currency_code must be 3 characters: {self.currency_code}")

        if self.amount < 0:
            raise ValueError(f"amount cannot be negative: {self.amount}")

    def __sub__(self, other: "Money") -> Decimal:
        """Signed difference; unlike amounts themselves it may be negative."""
        if not isinstance(other, Money):
            raise TypeError(f"Cannot subtract {type(other)} from Money")
        if self.currency_code != other.currency_code:
            raise ValueError(
                f"Cannot subtract amounts in different currencies: "
                f"{self.currency_code} vs {other.currency_code}"
            )
        return self.amount - other.amount

    def same_as(self, other: "Money") -> bool:
        return self.currency_code == other.currency_code and self.amount == other.amount

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency_code}"

    @classmethod
    def zero(cls, currency_code: str = "USD") -> "Money":
        return cls(amount=Decimal("0"), currency_code=currency_code)
