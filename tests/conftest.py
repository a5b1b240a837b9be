# Trolley Test Suite - Shared Configuration and Fixtures
#
# This module provides:
# - An in-process fake backend (httpx.MockTransport) that records requests
# - Session fixtures (anonymous and logged-in admin)
# - Record payload factories in the backend's camelCase wire format
# - Failure message formatting

import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from trolley.client import TrolleyClient
from trolley.models import Admin
from trolley.session import AuthSession, MemorySessionStorage


# =============================================================================
# CONFIGURATION
# =============================================================================

BASE_URL = "http://testserver/api"
API_PREFIX = "/api"

ADMIN_TOKEN = "tok-admin-alpha"


# =============================================================================
# FAILURE MESSAGE HELPER
# =============================================================================

class TestFailure(Exception):
    """
    Custom exception with detailed, human-readable failure messages.

    Structure:
    1. Scenario: What was being tested
    2. Expected: What should have happened
    3. Actual: What actually happened
    4. Code Location: Where to look in the codebase
    """

    __test__ = False

    def __init__(self, scenario: str, expected: str, actual: str, code_location: str):
        self.scenario = scenario
        self.expected = expected
        self.actual = actual
        self.code_location = code_location
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        return "\n".join([
            "",
            "=" * 80,
            "TEST FAILURE DETAILS",
            "=" * 80,
            f"SCENARIO: {self.scenario}",
            "-" * 80,
            f"EXPECTED: {self.expected}",
            f"ACTUAL: {self.actual}",
            "-" * 80,
            f"CODE LOCATION: {self.code_location}",
            "=" * 80,
        ])


# =============================================================================
# FAKE BACKEND
# =============================================================================

Responder = Callable[[httpx.Request], httpx.Response]


def envelope(data: Any = None, *, success: bool = True, message: Optional[str] = None) -> Dict:
    """Build the `{success, data, message}` body every backend route returns."""
    body: Dict[str, Any] = {"success": success}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    return body


class FakeBackend:
    """
    Routes requests by (method, path) to canned responses.

    Unrouted requests get a 404 envelope. Every request is recorded so tests
    can assert on what was actually sent.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Responder] = {}
        self.requests: List[httpx.Request] = []

    def on(
        self,
        method: str,
        path: str,
        data: Any = None,
        *,
        status: int = 200,
        message: Optional[str] = None,
        success: Optional[bool] = None,
        body: Any = None,
        responder: Optional[Callable[[httpx.Request], httpx.Response]] = None,
    ) -> None:
        key = (method.upper(), API_PREFIX + path)
        if responder is not None:
            self.routes[key] = responder
            return
        if body is None:
            ok = success if success is not None else status < 400
            body = envelope(data, success=ok, message=message)
        self.routes[key] = _canned(status, body)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(
                404, json=envelope(success=False, message=f"Route not found: {request.url.path}")
            )
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        full = API_PREFIX + path
        return [r for r in self.requests if r.method == method.upper() and r.url.path == full]

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


def _canned(status: int, body: Any) -> Callable[[httpx.Request], httpx.Response]:
    # A fresh Response per request; httpx binds each one to its request
    def respond(request: httpx.Request) -> httpx.Response:
        if isinstance(body, (bytes, str)):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)
    return respond


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content.decode("utf-8"))


# =============================================================================
# TEST DATA FACTORIES
# =============================================================================

def admin_payload(**overrides) -> Dict:
    payload = {
        "id": "a1",
        "email": "admin@spicytrolley.in",
        "name": "Asha Admin",
        "role": "admin",
        "createdAt": "2026-01-05T10:00:00.000Z",
    }
    payload.update(overrides)
    return payload


def menu_item_payload(item_id: str = "m1", name: str = "Paneer Tikka", price: float = 100,
                      category: str = "Starters", available: bool = True, **overrides) -> Dict:
    payload = {
        "id": item_id,
        "name": name,
        "description": f"{name} for events",
        "price": price,
        "category": category,
        "available": available,
        "createdAt": "2026-10-01T08:30:00.000Z",
        "updatedAt": "2026-10-01T08:30:00.000Z",
    }
    payload.update(overrides)
    return payload


def order_payload(order_id: str = "o1", items: Optional[List[Dict]] = None,
                  total: Optional[float] = None, status: str = "pending", **overrides) -> Dict:
    if items is None:
        items = [
            {"menuItemId": "m1", "menuItemName": "Paneer Tikka", "quantity": 2, "price": 100, "subtotal": 200},
            {"menuItemId": "m2", "menuItemName": "Dal Makhani", "quantity": 1, "price": 50, "subtotal": 50},
        ]
    payload = {
        "id": order_id,
        "customerName": "Ravi Kumar",
        "customerEmail": "ravi@example.com",
        "customerPhone": "9876543210",
        "eventType": "marriage",
        "eventDate": "2026-12-01T00:00:00.000Z",
        "guestCount": 150,
        "items": items,
        "totalAmount": total if total is not None else sum(i["subtotal"] for i in items),
        "status": status,
        "createdAt": "2026-10-19T04:17:00.000Z",
        "updatedAt": "2026-10-19T04:17:00.000Z",
    }
    payload.update(overrides)
    return payload


def raw_product_payload(product_id: str = "r1", name: str = "Basmati Rice",
                        current: float = 10, minimum: float = 5, **overrides) -> Dict:
    payload = {
        "id": product_id,
        "name": name,
        "category": "Grains",
        "unit": "kg",
        "costPerUnit": 90,
        "currentStock": current,
        "minimumStock": minimum,
        "supplier": "Sharma Traders",
        "createdAt": "2026-09-01T00:00:00.000Z",
        "updatedAt": "2026-10-18T00:00:00.000Z",
    }
    payload.update(overrides)
    return payload


def purchase_payload(purchase_id: str = "p1", **overrides) -> Dict:
    payload = {
        "id": purchase_id,
        "rawProductId": "r1",
        "rawProductName": "Basmati Rice",
        "quantity": 25,
        "costPerUnit": 90,
        "totalCost": 2250,
        "supplier": "Sharma Traders",
        "purchaseDate": "2026-10-18T06:00:00.000Z",
        "createdAt": "2026-10-18T06:00:00.000Z",
    }
    payload.update(overrides)
    return payload


# =============================================================================
# PYTEST FIXTURES
# =============================================================================

@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def storage() -> MemorySessionStorage:
    return MemorySessionStorage()


@pytest.fixture
def session(storage: MemorySessionStorage) -> AuthSession:
    """Anonymous session."""
    return AuthSession(storage)


@pytest.fixture
def admin_session(session: AuthSession) -> AuthSession:
    """Session as left behind by a successful admin login."""
    session.begin(ADMIN_TOKEN, Admin.from_dict(admin_payload()))
    return session


@pytest.fixture
def client(backend: FakeBackend, session: AuthSession) -> TrolleyClient:
    """Anonymous client wired to the fake backend."""
    return TrolleyClient(BASE_URL, session, transport=backend.transport)


@pytest.fixture
def admin_client(backend: FakeBackend, admin_session: AuthSession) -> TrolleyClient:
    """Logged-in admin client wired to the fake backend."""
    return TrolleyClient(BASE_URL, admin_session, transport=backend.transport)


# =============================================================================
# TEST MARKERS
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "smoke: Quick smoke tests for critical paths")
    config.addinivalue_line("markers", "auth: Session and authentication tests")
    config.addinivalue_line("markers", "menu: Menu item tests")
    config.addinivalue_line("markers", "orders: Event order tests")
    config.addinivalue_line("markers", "inventory: Raw product and stock tests")
    config.addinivalue_line("markers", "purchases: Purchase ledger tests")
    config.addinivalue_line("markers", "sales: Sales ledger tests")
    config.addinivalue_line("markers", "reports: Report query tests")
    config.addinivalue_line("markers", "cli: Command-line front-end tests")
