# Overview: TrolleyClient facade; one gateway shared by every resource service.

from __future__ import annotations

import logging
from typing import Optional

import httpx

from .api.gateway import ApiGateway, AuthError
from .models import Admin
from .services import (
    AuthService,
    MenuService,
    OrdersService,
    PurchasesService,
    RawProductsService,
    ReportsService,
    SalesService,
)
from .session import AuthSession


logger = logging.getLogger(__name__)


class TrolleyClient:
    """
    Typed access to the catering backend.

    Operations are independent coroutines and may be awaited concurrently;
    the client adds no ordering between them. Use as an async context
    manager, or call aclose() when done.
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[AuthSession] = None,
        *,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.session = session if session is not None else AuthSession()
        self.gateway = ApiGateway(base_url, self.session, timeout=timeout, transport=transport)

        self.auth = AuthService(self.gateway)
        self.menu = MenuService(self.gateway)
        self.orders = OrdersService(self.gateway)
        self.raw_products = RawProductsService(self.gateway)
        self.purchases = PurchasesService(self.gateway)
        self.sales = SalesService(self.gateway)
        self.reports = ReportsService(self.gateway)

    def on_unauthorized(self, listener):
        return self.gateway.on_unauthorized(listener)

    async def restore_session(self) -> Optional[Admin]:
        """
        Startup check for a token left in durable storage.

        Returns the verified admin, or None when there is no token or the
        server no longer accepts it (the 401 path has cleared it by then).
        """
        if not self.session.is_authenticated:
            return None
        try:
            return await self.auth.verify()
        except AuthError:
            logger.info("Stored token rejected; continuing as anonymous")
            return None

    async def aclose(self) -> None:
        await self.gateway.aclose()

    async def __aenter__(self) -> "TrolleyClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
