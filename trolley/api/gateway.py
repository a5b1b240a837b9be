# Overview: Single outbound HTTP gateway; attaches bearer auth, unwraps the response envelope, and enforces the 401 policy.

# trolley/api/gateway.py
"""
API Gateway

Contract for every call:
- Request: if the injected AuthSession holds a token, send
  `Authorization: Bearer <token>`; otherwise the request is anonymous.
- Response 401: clear the session, notify unauthorized listeners, raise
  AuthError. This fires for every call, login included, so callers must not
  treat a 401 as locally recoverable.
- Other non-2xx, network failures and timeouts: TransportError carrying the
  server's message when it sent one.
- 2xx: body must be `{success, data?, message?, error?}`; the inner `data`
  is returned. Missing `data` is a DecodeError unless the operation is
  declared as returning nothing.

One call = one HTTP request. No retries, caching, batching or de-duplication.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

import httpx

from ..models import Envelope
from ..session import AuthSession


logger = logging.getLogger(__name__)

GENERIC_TRANSPORT_ERROR = "Request failed. Please check your connection and try again."
GENERIC_AUTH_ERROR = "Authentication required"


class ApiError(Exception):
    """Base for every failure surfaced by the gateway."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TransportError(ApiError):
    """Network failure, timeout, or a non-2xx response other than 401."""


class AuthError(ApiError):
    """401 response; the session has already been cleared."""


class DecodeError(ApiError):
    """Response body does not honour the envelope contract."""


UnauthorizedListener = Callable[[], None]


class ApiGateway:
    """
    Configured async HTTP client shared by every resource service.

    Pass `transport` to route requests somewhere other than the network
    (httpx.MockTransport in tests).
    """

    def __init__(
        self,
        base_url: str,
        session: AuthSession,
        *,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session
        self._unauthorized_listeners: List[UnauthorizedListener] = []
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
            event_hooks={
                "request": [self._attach_token],
                "response": [self._enforce_unauthorized_policy],
            },
        )

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on_unauthorized(self, listener: UnauthorizedListener) -> UnauthorizedListener:
        """Register a callback fired after a 401 has cleared the session."""
        self._unauthorized_listeners.append(listener)
        return listener

    def remove_unauthorized_listener(self, listener: UnauthorizedListener) -> None:
        if listener in self._unauthorized_listeners:
            self._unauthorized_listeners.remove(listener)

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    async def _attach_token(self, request: httpx.Request) -> None:
        token = self.session.token
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    async def _enforce_unauthorized_policy(self, response: httpx.Response) -> None:
        if response.status_code != 401:
            return
        logger.warning(
            "401 from %s %s; clearing stored session",
            response.request.method,
            response.request.url.path,
        )
        self.session.clear()
        for listener in list(self._unauthorized_listeners):
            listener()

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[dict] = None,
        expect_data: bool = True,
    ) -> Any:
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        try:
            response = await self.client.request(method, path, json=json, params=params or None)
        except httpx.TimeoutException as exc:
            logger.warning("%s %s timed out", method, path)
            raise TransportError("Request timed out. Please try again.") from exc
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise TransportError(GENERIC_TRANSPORT_ERROR) from exc

        logger.debug("%s %s -> %s", method, path, response.status_code)

        if response.status_code == 401:
            raise AuthError(_server_message(response) or GENERIC_AUTH_ERROR, 401)
        if not response.is_success:
            raise TransportError(
                _server_message(response) or GENERIC_TRANSPORT_ERROR,
                response.status_code,
            )
        return self._unwrap(response, method, path, expect_data)

    def _unwrap(self, response: httpx.Response, method: str, path: str, expect_data: bool) -> Any:
        if not response.content and not expect_data:
            return None
        try:
            payload = response.json()
        except ValueError as exc:
            raise DecodeError(f"{method} {path} returned a non-JSON body", response.status_code) from exc

        if not isinstance(payload, dict):
            raise DecodeError(f"{method} {path} returned a body that is not an API envelope", response.status_code)

        envelope = Envelope.from_dict(payload)
        if payload.get("success") is False:
            raise TransportError(envelope.server_message() or GENERIC_TRANSPORT_ERROR, response.status_code)
        if expect_data and not envelope.has_data:
            raise DecodeError(f"{method} {path} succeeded without data", response.status_code)
        return envelope.data

    async def get(self, path: str, params: Optional[dict] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None, *, expect_data: bool = True) -> Any:
        return await self.request("POST", path, json=json, expect_data=expect_data)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def patch(self, path: str, json: Any = None) -> Any:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> None:
        await self.request("DELETE", path, expect_data=False)

    async def aclose(self) -> None:
        await self.client.aclose()


def _server_message(response: httpx.Response) -> Optional[str]:
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    return payload.get("message") or payload.get("error")
