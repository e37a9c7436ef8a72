from datetime import timedelta
from functools import lru_cache

from hotel_booking.application.interfaces.clock import SystemClock
from hotel_booking.application.interfaces.id_generator import RealIdGenerator
from hotel_booking.application.use_cases.booking_management import BookingManagementService
from hotel_booking.application.use_cases.booking_session_machine import BookingSessionMachine
from hotel_booking.application.use_cases.get_hotel_details import GetHotelDetailsUseCase
from hotel_booking.application.use_cases.search_hotels import SearchHotelsUseCase
from hotel_booking.config import Settings, get_settings
from hotel_booking.infrastructure.circuit_breaker import build_supplier_breaker
from hotel_booking.infrastructure.fallback_catalog import build_fallback_hotels
from hotel_booking.infrastructure.gateways.tbo_supplier_gateway import TboHotelSupplierGateway
from hotel_booking.infrastructure.in_memory.committed_booking_repo import InMemoryCommittedBookingRepo
from hotel_booking.infrastructure.in_memory.session_store import InMemorySessionStore
from hotel_booking.infrastructure.in_memory.supplier_gateway import StubHotelSupplierGateway


def build_gateway(settings: Settings):
    if settings.use_in_memory:
        return StubHotelSupplierGateway()
    return TboHotelSupplierGateway(
        base_url=settings.supplier_base_url,
        username=settings.supplier_username or "",
        password=settings.supplier_password or "",
        timeout_seconds=settings.supplier_timeout_seconds,
        retry_attempts=settings.supplier_retry_attempts,
        retry_base_delay=settings.supplier_retry_base_delay_seconds,
        retry_max_delay=settings.supplier_retry_max_delay_seconds,
        breaker=build_supplier_breaker(
            fail_max=settings.supplier_breaker_fail_max,
            reset_timeout=settings.supplier_breaker_reset_timeout,
        ),
    )


def build_use_cases(settings: Settings, gateway=None, clock=None, id_generator=None) -> dict:
    """Wire every use case around one gateway and one set of stores."""
    gateway = gateway or build_gateway(settings)
    clock = clock or SystemClock()
    timeout = settings.supplier_timeout_seconds
    booking_management = BookingManagementService(
        gateway=gateway,
        repo=InMemoryCommittedBookingRepo(),
        timeout_seconds=timeout,
    )
    return {
        "gateway": gateway,
        "search_hotels": SearchHotelsUseCase(
            gateway=gateway,
            clock=clock,
            fallback_catalog=build_fallback_hotels if settings.search_fallback_enabled else None,
            timeout_seconds=timeout,
        ),
        "hotel_details": GetHotelDetailsUseCase(
            gateway=gateway,
            clock=clock,
            cache_ttl=timedelta(seconds=settings.hotel_details_cache_seconds),
        ),
        "booking_management": booking_management,
        "session_machine": BookingSessionMachine(
            gateway=gateway,
            store=InMemorySessionStore(),
            booking_management=booking_management,
            clock=clock,
            id_generator=id_generator or RealIdGenerator(),
            payment_mode=settings.supplier_payment_mode,
            session_ttl=timedelta(minutes=settings.session_ttl_minutes),
            timeout_seconds=timeout,
        ),
    }


@lru_cache(maxsize=1)
def _bundle() -> dict:
    return build_use_cases(get_settings())


def get_use_cases() -> dict:
    """Process-wide wiring; sessions and committed bookings live in memory."""
    return _bundle()
