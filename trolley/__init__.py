# trolley/__init__.py
from typing import Optional

import httpx

from .config import Config
from .client import TrolleyClient
from .session import AuthSession, FileSessionStorage


def create_client(
    config=Config,
    *,
    storage=None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> TrolleyClient:
    """Build a client from configuration; the session persists to SESSION_PATH unless storage is given."""
    if storage is None:
        storage = FileSessionStorage(config.SESSION_PATH)
    return TrolleyClient(
        config.API_BASE_URL,
        AuthSession(storage),
        timeout=config.REQUEST_TIMEOUT,
        transport=transport,
    )


__all__ = ['Config', 'TrolleyClient', 'AuthSession', 'create_client']
