"""Price-lock (pre-book) result and its reconciliation against the displayed offer."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from hotel_booking.domain.value_objects.money import Money


@dataclass(frozen=True)
class PriceLock:
    """What the supplier returned when re-validating the offer."""

    locked_booking_code: str
    price: Money
    published_price: Decimal
    refundable: bool | None = None
    cancellation_policy: str | None = None
    supplier_price_changed: bool = False
    supplier_policy_changed: bool = False
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "locked_booking_code": self.locked_booking_code,
            "amount": str(self.price.amount),
            "currency": self.price.currency_code,
            "published_price": str(self.published_price),
            "refundable": self.refundable,
            "cancellation_policy": self.cancellation_policy,
            "supplier_price_changed": self.supplier_price_changed,
            "supplier_policy_changed": self.supplier_policy_changed,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PriceLock":
        return cls(
            locked_booking_code=data["locked_booking_code"],
            price=Money(amount=Decimal(data["amount"]), currency_code=data["currency"]),
            published_price=Decimal(data["published_price"]),
            refundable=data.get("refundable"),
            cancellation_policy=data.get("cancellation_policy"),
            supplier_price_changed=data.get("supplier_price_changed", False),
            supplier_policy_changed=data.get("supplier_policy_changed", False),
            message=data.get("message"),
        )


@dataclass(frozen=True)
class Reconciliation:
    """Old vs. new price and policy, as surfaced to the caller."""

    old_price: Money
    new_price: Money
    old_refundable: bool
    new_refundable: bool
    old_cancellation_policy: str | None
    new_cancellation_policy: str | None
    price_changed: bool
    policy_changed: bool

    @property
    def changed(self) -> bool:
        return self.price_changed or self.policy_changed

    @property
    def price_difference(self) -> Decimal | None:
        """new - old; None when the currencies differ."""
        if self.old_price.currency_code != self.new_price.currency_code:
            return None
        return self.new_price - self.old_price

    def to_dict(self) -> dict[str, Any]:
        return {
            "old_amount": str(self.old_price.amount),
            "old_currency": self.old_price.currency_code,
            "new_amount": str(self.new_price.amount),
            "new_currency": self.new_price.currency_code,
            "old_refundable": self.old_refundable,
            "new_refundable": self.new_refundable,
            "old_cancellation_policy": self.old_cancellation_policy,
            "new_cancellation_policy": self.new_cancellation_policy,
            "price_changed": self.price_changed,
            "policy_changed": self.policy_changed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Reconciliation":
        return cls(
            old_price=Money(amount=Decimal(data["old_amount"]), currency_code=data["old_currency"]),
            new_price=Money(amount=Decimal(data["new_amount"]), currency_code=data["new_currency"]),
            old_refundable=data["old_refundable"],
            new_refundable=data["new_refundable"],
            old_cancellation_policy=data.get("old_cancellation_policy"),
            new_cancellation_policy=data.get("new_cancellation_policy"),
            price_changed=data["price_changed"],
            policy_changed=data["policy_changed"],
        )
