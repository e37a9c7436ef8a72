from datetime import timedelta

import pytest

from hotel_booking.application.interfaces.hotel_supplier_gateway import SupplierResult
from hotel_booking.application.use_cases.get_hotel_details import GetHotelDetailsUseCase
from hotel_booking.domain.errors import SupplierTimeoutError, ValidationError


@pytest.fixture
def hotel_details(gateway, clock):
    return GetHotelDetailsUseCase(gateway=gateway, clock=clock, cache_ttl=timedelta(minutes=30))


async def test_details_are_mapped(hotel_details, gateway):
    details = await hotel_details.execute(["TAJ001"])

    assert len(details) == 1
    taj = details[0]
    assert taj.hotel_name == "The Grand Palace Hotel"
    assert taj.check_in_time == "14:00"
    assert ("Gateway of India", "0.5 km") in taj.attractions
    assert taj.latitude == pytest.approx(18.9220)
    assert gateway.calls_for("hotel_details")[0] == {"HotelCodes": "TAJ001", "Language": "en"}


async def test_cached_codes_skip_the_supplier(hotel_details, gateway):
    await hotel_details.execute(["TAJ001"])
    details = await hotel_details.execute(["IBIS001", "TAJ001"])

    assert [detail.hotel_code for detail in details] == ["IBIS001", "TAJ001"]
    requests = gateway.calls_for("hotel_details")
    assert [request["HotelCodes"] for request in requests] == ["TAJ001", "IBIS001"]


async def test_cache_expires(hotel_details, gateway, clock):
    await hotel_details.execute(["TAJ001"])
    clock.advance(minutes=31)
    await hotel_details.execute(["TAJ001"])

    assert len(gateway.calls_for("hotel_details")) == 2


async def test_unknown_codes_are_skipped(hotel_details):
    assert await hotel_details.execute(["NOPE001"]) == []


@pytest.mark.parametrize("codes", [[], ["", "  "]])
async def test_codes_are_required(hotel_details, gateway, codes):
    with pytest.raises(ValidationError):
        await hotel_details.execute(codes)
    assert gateway.calls == []


async def test_supplier_failure_is_raised(hotel_details, gateway):
    gateway.queue_result("hotel_details", SupplierResult.failure("TIMEOUT", "Request timed out"))

    with pytest.raises(SupplierTimeoutError):
        await hotel_details.execute(["TAJ001"])
