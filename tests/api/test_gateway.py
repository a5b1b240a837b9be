# Trolley API Tests - Gateway Envelope & Transport
#
# Tests for:
# - Envelope unwrapping (success, missing data, non-JSON)
# - Server messages surfaced on failure
# - Network errors and timeouts
# - Query parameter handling

import httpx
import pytest

from tests.conftest import BASE_URL, FakeBackend, menu_item_payload
from trolley.api.gateway import (
    GENERIC_TRANSPORT_ERROR,
    ApiGateway,
    DecodeError,
    TransportError,
)
from trolley.client import TrolleyClient


pytestmark = pytest.mark.anyio


class TestEnvelope:

    @pytest.mark.smoke
    async def test_returns_inner_data(self, client, backend):
        backend.on("GET", "/menu", [menu_item_payload()])

        data = await client.gateway.get("/menu")
        assert data == [menu_item_payload()]

    async def test_success_without_data_is_decode_error(self, client, backend):
        backend.on("GET", "/menu", body={"success": True})

        with pytest.raises(DecodeError):
            await client.menu.list()

    async def test_non_json_body_is_decode_error(self, client, backend):
        backend.on("GET", "/menu", body="<html>proxy error page</html>")

        with pytest.raises(DecodeError):
            await client.menu.list()

    async def test_non_object_body_is_decode_error(self, client, backend):
        backend.on("GET", "/menu", body=[1, 2, 3])

        with pytest.raises(DecodeError):
            await client.menu.list()

    async def test_success_false_on_2xx_is_transport_error(self, client, backend):
        backend.on("GET", "/menu", status=200, success=False, message="Menu is being rebuilt")

        with pytest.raises(TransportError, match="Menu is being rebuilt"):
            await client.menu.list()

    async def test_delete_accepts_empty_envelope(self, admin_client, backend):
        backend.on("DELETE", "/menu/m1")

        assert await admin_client.menu.delete("m1") is None

    async def test_delete_accepts_empty_body(self, admin_client, backend):
        backend.on("DELETE", "/menu/m1", status=204, body=b"")

        assert await admin_client.menu.delete("m1") is None


class TestFailures:

    @pytest.mark.smoke
    async def test_server_message_is_surfaced(self, client, backend):
        backend.on("GET", "/menu/missing", status=404, message="Menu item not found")

        with pytest.raises(TransportError) as excinfo:
            await client.menu.get("missing")
        assert excinfo.value.message == "Menu item not found"
        assert excinfo.value.status_code == 404

    async def test_error_field_used_when_no_message(self, client, backend):
        backend.on("GET", "/menu", status=500, body={"success": False, "error": "Database unavailable"})

        with pytest.raises(TransportError, match="Database unavailable"):
            await client.menu.list()

    async def test_generic_message_without_body(self, client, backend):
        backend.on("GET", "/menu", status=502, body=b"")

        with pytest.raises(TransportError) as excinfo:
            await client.menu.list()
        assert excinfo.value.message == GENERIC_TRANSPORT_ERROR

    async def test_network_error(self, session):
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        client = TrolleyClient(BASE_URL, session, transport=httpx.MockTransport(refuse))
        with pytest.raises(TransportError) as excinfo:
            await client.menu.list()
        assert excinfo.value.message == GENERIC_TRANSPORT_ERROR
        assert excinfo.value.status_code is None

    async def test_timeout(self, session):
        def hang(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = TrolleyClient(BASE_URL, session, transport=httpx.MockTransport(hang))
        with pytest.raises(TransportError, match="timed out"):
            await client.orders.list()


class TestRequests:

    async def test_paths_are_relative_to_api_root(self, session):
        backend = FakeBackend()
        backend.on("GET", "/menu/categories", ["Starters"])
        gateway = ApiGateway(BASE_URL + "/", session, transport=backend.transport)

        await gateway.get("/menu/categories")

        assert str(backend.last_request.url) == "http://testserver/api/menu/categories"
        await gateway.aclose()

    async def test_none_params_are_dropped(self, client, backend):
        backend.on("GET", "/sales", [])

        await client.gateway.get("/sales", params={"startDate": None, "endDate": None})

        assert backend.last_request.url.query == b""

    async def test_json_content_type(self, admin_client, backend):
        backend.on("PATCH", "/orders/o1/status", body={"success": True, "data": {"id": "o1", "items": []}})

        await admin_client.gateway.patch("/orders/o1/status", {"status": "confirmed"})

        assert backend.last_request.headers["Content-Type"] == "application/json"
