"""
Circuit Breaker for calls to the hotel supplier.

- CLOSED: normal operation, requests pass through
- OPEN: too many consecutive failures, requests fail immediately
- HALF_OPEN: reset timeout elapsed, the next request is the trial call

Only transport failures and 5xx responses count as failures. Supplier
business rejections (4xx, API status errors) are successful calls from the
breaker's point of view.

pybreaker only wraps synchronous callables, so async callers await the
request themselves and report the outcome with record_success() /
record_failure().
"""

import contextlib
import logging

from pybreaker import STATE_OPEN, CircuitBreaker, CircuitBreakerError, CircuitBreakerListener

logger = logging.getLogger(__name__)


def log_circuit_state_change(breaker_name: str, old_state: str, new_state: str) -> None:
    level = logging.ERROR if new_state == STATE_OPEN else logging.WARNING
    logger.log(
        level,
        "Circuit breaker state changed",
        extra={
            "breaker_name": breaker_name,
            "old_state": old_state,
            "new_state": new_state,
        },
    )


class SupplierBreakerListener(CircuitBreakerListener):
    """Logs circuit breaker state changes."""

    def __init__(self, name: str):
        self.name = name

    def state_change(self, cb, old_state, new_state):
        log_circuit_state_change(self.name, old_state.name if old_state else None, new_state.name)


def build_supplier_breaker(fail_max: int = 5, reset_timeout: int = 60) -> CircuitBreaker:
    return CircuitBreaker(
        fail_max=fail_max,
        reset_timeout=reset_timeout,
        name="hotel_supplier_circuit_breaker",
        listeners=[SupplierBreakerListener("hotel_supplier")],
    )


# Shared by every supplier gateway unless one is injected
supplier_breaker = build_supplier_breaker()


def _probe() -> None:
    return None


def ensure_available(breaker: CircuitBreaker) -> None:
    """
    Raise CircuitBreakerError while the circuit is open.

    Once reset_timeout has elapsed the circuit is left half-open, and the
    outcome of the caller's request decides whether it closes or reopens.
    """
    if breaker.current_state != STATE_OPEN:
        return
    # Raises until reset_timeout has elapsed
    breaker.call(_probe)
    breaker.half_open()


def record_success(breaker: CircuitBreaker) -> None:
    # Opened by other requests while this one was in flight
    if breaker.current_state == STATE_OPEN:
        return
    breaker.call(_probe)


def record_failure(breaker: CircuitBreaker, error: Exception) -> None:
    """Count one failure; a failed half-open trial reopens the circuit."""

    def _fail() -> None:
        raise error

    with contextlib.suppress(CircuitBreakerError, type(error)):
        breaker.call(_fail)


__all__ = [
    "supplier_breaker",
    "build_supplier_breaker",
    "ensure_available",
    "record_success",
    "record_failure",
    "CircuitBreakerError",
]
