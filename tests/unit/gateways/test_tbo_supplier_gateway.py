import unittest
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from hotel_booking.infrastructure.circuit_breaker import build_supplier_breaker
from hotel_booking.infrastructure.gateways.tbo_supplier_gateway import TboHotelSupplierGateway


def make_response(status_code=200, body=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    if body is None:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = body
    return response


class TestTboHotelSupplierGateway(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.sleep = AsyncMock()
        self.breaker = build_supplier_breaker(fail_max=3, reset_timeout=60)
        self.gateway = TboHotelSupplierGateway(
            base_url="http://test.tbo.local/HotelAPI/",
            username="user",
            password="pwd",
            timeout_seconds=5.0,
            retry_attempts=3,
            breaker=self.breaker,
            sleep=self.sleep,
        )
        self.search_request = {
            "CheckIn": "2024-03-15",
            "CheckOut": "2024-03-18",
            "CityCode": "BOM",
            "GuestNationality": "IN",
            "PaxRooms": [{"Adults": 2, "Children": 0, "ChildrenAges": []}],
        }

    def mock_client(self, mock_client_cls, *, responses=None, side_effect=None):
        client = AsyncMock()
        client.__aenter__.return_value = client
        if side_effect is not None:
            client.post.side_effect = side_effect
        else:
            client.post.side_effect = responses
        mock_client_cls.return_value = client
        return client

    @patch("httpx.AsyncClient")
    async def test_search_success(self, mock_client_cls):
        body = {"Status": 1, "Hotels": [{"BookingCode": "LUX5STAR001", "HotelName": "The Grand Palace Hotel"}]}
        client = self.mock_client(mock_client_cls, responses=[make_response(200, body)])

        result = await self.gateway.search(self.search_request)

        self.assertTrue(result.ok)
        self.assertEqual(result.payload, body)
        self.assertEqual(result.http_status, 200)

        args, kwargs = client.post.call_args
        self.assertEqual(args[0], "http://test.tbo.local/HotelAPI/search")
        self.assertEqual(kwargs["json"], self.search_request)
        _, client_kwargs = mock_client_cls.call_args
        self.assertEqual(client_kwargs["auth"], ("user", "pwd"))
        self.assertEqual(client_kwargs["timeout"], 5.0)

    @patch("httpx.AsyncClient")
    async def test_api_error_status(self, mock_client_cls):
        body = {"Status": 0, "Message": "No hotels found"}
        self.mock_client(mock_client_cls, responses=[make_response(200, body)])

        result = await self.gateway.search(self.search_request)

        self.assertEqual(result.status, "FAILED")
        self.assertEqual(result.error_code, "API_ERROR")
        self.assertEqual(result.error_message, "No hotels found")
        self.assertEqual(result.payload, body)

    @patch("httpx.AsyncClient")
    async def test_not_found_keeps_supplier_code(self, mock_client_cls):
        body = {"Status": 0, "ErrorCode": "BOOKING_NOT_FOUND", "Message": "Booking not found"}
        client = self.mock_client(mock_client_cls, responses=[make_response(404, body)])

        result = await self.gateway.booking_detail({"ConfirmationNo": "CONF-404"})

        self.assertEqual(result.error_code, "BOOKING_NOT_FOUND")
        self.assertEqual(result.http_status, 404)
        self.assertEqual(client.post.call_count, 1)
        self.sleep.assert_not_awaited()

    @patch("httpx.AsyncClient")
    async def test_non_json_body(self, mock_client_cls):
        self.mock_client(mock_client_cls, responses=[make_response(200, None, text="<html></html>")])

        result = await self.gateway.hotel_details({"HotelCodes": "TAJ001"})

        self.assertEqual(result.error_code, "API_ERROR")

    @patch("httpx.AsyncClient")
    async def test_server_errors_are_retried(self, mock_client_cls):
        ok = make_response(200, {"Status": 1, "BookingCode": "LUX5STAR001-PREBOOK"})
        client = self.mock_client(
            mock_client_cls,
            responses=[make_response(503, None, text="Service Unavailable"), make_response(502, None), ok],
        )

        result = await self.gateway.pre_book({"BookingCode": "LUX5STAR001", "PaymentMode": "Limit"})

        self.assertTrue(result.ok)
        self.assertEqual(client.post.call_count, 3)
        self.assertEqual(self.sleep.await_count, 2)

    @patch("httpx.AsyncClient")
    async def test_retries_give_up_after_max_attempts(self, mock_client_cls):
        client = self.mock_client(mock_client_cls, side_effect=httpx.ConnectError("Connection refused"))

        result = await self.gateway.search(self.search_request)

        self.assertEqual(result.error_code, "NETWORK_ERROR")
        self.assertEqual(client.post.call_count, 3)

    @patch("httpx.AsyncClient")
    async def test_client_errors_are_not_retried(self, mock_client_cls):
        body = {"Status": 0, "Message": "Room no longer available"}
        client = self.mock_client(mock_client_cls, responses=[make_response(400, body)])

        result = await self.gateway.pre_book({"BookingCode": "X", "PaymentMode": "Limit"})

        self.assertEqual(result.error_code, "HTTP_400")
        self.assertEqual(result.error_message, "Room no longer available")
        self.assertEqual(client.post.call_count, 1)

    @patch("httpx.AsyncClient")
    async def test_book_is_sent_once(self, mock_client_cls):
        client = self.mock_client(mock_client_cls, side_effect=httpx.ReadTimeout("Read timed out"))

        result = await self.gateway.book({"BookingCode": "LUX5STAR001-PREBOOK", "ClientReferenceId": "idem-1"})

        self.assertEqual(result.error_code, "TIMEOUT")
        self.assertEqual(client.post.call_count, 1)
        self.sleep.assert_not_awaited()

    @patch("httpx.AsyncClient")
    async def test_cancel_server_error_is_sent_once(self, mock_client_cls):
        client = self.mock_client(mock_client_cls, responses=[make_response(500, None, text="boom")])

        result = await self.gateway.cancel({"ConfirmationNo": "CONF-2024-001234"})

        self.assertEqual(result.http_status, 500)
        self.assertEqual(client.post.call_count, 1)

    @patch("httpx.AsyncClient")
    async def test_open_circuit_short_circuits(self, mock_client_cls):
        client = self.mock_client(mock_client_cls, side_effect=httpx.ConnectError("Connection refused"))

        for _ in range(3):
            await self.gateway.book({"BookingCode": "X"})
        self.assertEqual(client.post.call_count, 3)

        result = await self.gateway.book({"BookingCode": "X"})

        self.assertEqual(result.error_code, "CIRCUIT_OPEN")
        self.assertEqual(client.post.call_count, 3)

    @patch("httpx.AsyncClient")
    async def test_booking_answer_survives_circuit_opening_mid_request(self, mock_client_cls):
        body = {"Status": 1, "ConfirmationNo": "CONF-STUB-000001", "BookingId": 900001}

        async def post(*args, **kwargs):
            self.breaker.open()
            return make_response(200, body)

        self.mock_client(mock_client_cls, side_effect=post)

        result = await self.gateway.book({"BookingCode": "LUX5STAR001-PREBOOK"})

        self.assertTrue(result.ok)
        self.assertEqual(result.payload["ConfirmationNo"], "CONF-STUB-000001")
        self.assertEqual(self.breaker.current_state, "open")

    @patch("httpx.AsyncClient")
    async def test_business_rejections_do_not_trip_the_circuit(self, mock_client_cls):
        body = {"Status": 0, "ErrorCode": "BOOKING_FAILED", "Message": "Booking failed"}
        client = self.mock_client(mock_client_cls, responses=[make_response(400, body) for _ in range(5)])

        for _ in range(5):
            result = await self.gateway.book({"BookingCode": "X"})

        self.assertEqual(result.error_code, "BOOKING_FAILED")
        self.assertEqual(client.post.call_count, 5)


if __name__ == "__main__":
    unittest.main()
