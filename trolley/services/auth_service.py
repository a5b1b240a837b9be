# Overview: Service-layer operations for auth; drives the client session through login, logout and verify.

from __future__ import annotations

import logging

from ..api.gateway import AuthError, DecodeError
from ..models import Admin, AuthResponse, LoginCredentials
from .base import ResourceService


logger = logging.getLogger(__name__)


class AuthService(ResourceService):
    @property
    def session(self):
        return self.gateway.session

    async def login(self, email: str, password: str) -> AuthResponse:
        """
        Authenticate and enter the `authenticated` state.

        Token and admin identity are stored only after the server accepts
        the credentials. Bad credentials come back as 401, so they raise
        AuthError and also pass through the global unauthorized policy.
        """
        credentials = LoginCredentials(email=email, password=password)
        credentials.validate()

        data = await self.gateway.post("/auth/login", credentials.to_dict())
        auth = self.record(AuthResponse, data)
        if not auth.token:
            raise DecodeError("Login response did not include a token")

        self.session.begin(auth.token, auth.admin)
        return auth

    async def logout(self) -> None:
        """
        Leave the `authenticated` state.

        Already anonymous: nothing to tell the server, nothing to clear.
        The local session is cleared even when the server call fails.
        """
        if not self.session.is_authenticated:
            return
        try:
            await self.gateway.post("/auth/logout", expect_data=False)
        except AuthError:
            logger.info("Server had already rejected the token; session cleared")
        finally:
            self.session.clear()

    async def verify(self) -> Admin:
        data = await self.gateway.get("/auth/verify")
        return self.record(Admin, data)
