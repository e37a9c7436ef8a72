"""Price/policy reconciliation between the displayed offer and the price lock."""

import logging

from hotel_booking.domain.entities.hotel import HotelResult
from hotel_booking.domain.entities.price_lock import PriceLock, Reconciliation

logger = logging.getLogger(__name__)


def reconcile_price_lock(hotel: HotelResult, price_lock: PriceLock) -> Reconciliation:
    """
    Compare what the user saw with what the supplier locked.

    A change is reported when the offered amount or currency differs, when
    refundability or cancellation-policy text differs, or when the supplier
    itself flags a price or policy change. Fields the lock response omits
    are taken as unchanged.

    Args:
        hotel: The offer selected from search results.
        price_lock: The supplier's pre-book answer.

    Returns:
        Reconciliation with old and new values.
    """
    old_price = hotel.price.offered
    new_price = price_lock.price

    new_refundable = hotel.refundable if price_lock.refundable is None else price_lock.refundable
    new_policy = (
        hotel.cancellation_policy if price_lock.cancellation_policy is None else price_lock.cancellation_policy
    )

    price_changed = price_lock.supplier_price_changed or not old_price.same_as(new_price)
    policy_changed = (
        price_lock.supplier_policy_changed
        or new_refundable != hotel.refundable
        or (new_policy or "") != (hotel.cancellation_policy or "")
    )

    reconciliation = Reconciliation(
        old_price=old_price,
        new_price=new_price,
        old_refundable=hotel.refundable,
        new_refundable=new_refundable,
        old_cancellation_policy=hotel.cancellation_policy,
        new_cancellation_policy=new_policy,
        price_changed=price_changed,
        policy_changed=policy_changed,
    )

    if reconciliation.changed:
        logger.info(
            "Price or policy changed at price lock",
            extra={
                "booking_code": price_lock.locked_booking_code,
                "old_price": str(old_price),
                "new_price": str(new_price),
                "price_changed": price_changed,
                "policy_changed": policy_changed,
            },
        )
    return reconciliation
