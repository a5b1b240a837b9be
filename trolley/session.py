# Overview: Client-side auth session; holds the bearer token and admin identity in durable storage.

"""
Auth Session Lifecycle

States:
- anonymous: no token stored; requests go out without an Authorization header
- authenticated: token + admin identity stored; every request carries
  `Authorization: Bearer <token>`

Transitions:
- begin(token, admin): anonymous -> authenticated (login is the only caller)
- clear(): any -> anonymous (logout, any 401 response, or a stored token the
  server no longer accepts at startup). Idempotent.

There is no refresh transition. Once the server rejects a token the only way
back is a new login.

Storage holds exactly two keys, AUTH_TOKEN_KEY and ADMIN_DATA_KEY. Writes are
last-write-wins; two processes logging in at once race on the same file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from .models import Admin


logger = logging.getLogger(__name__)

AUTH_TOKEN_KEY = "authToken"
ADMIN_DATA_KEY = "adminData"

ANONYMOUS = "anonymous"
AUTHENTICATED = "authenticated"


class MemorySessionStorage:
    """Process-local key/value storage (tests, embedding in another app)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileSessionStorage:
    """
    JSON-file storage that survives process restarts.

    The whole file is re-read on every access so a login from another
    process is picked up without restarting.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable session file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key not in data:
            return
        del data[key]
        self._save(data)


class AuthSession:
    def __init__(self, storage=None):
        self.storage = storage if storage is not None else MemorySessionStorage()

    @property
    def token(self) -> Optional[str]:
        return self.storage.get_item(AUTH_TOKEN_KEY) or None

    @property
    def admin(self) -> Optional[Admin]:
        raw = self.storage.get_item(ADMIN_DATA_KEY)
        if not raw:
            return None
        try:
            return Admin.from_json(raw)
        except (ValueError, TypeError, AttributeError):
            logger.warning("Stored admin identity is not a valid JSON object; ignoring it")
            return None

    @property
    def state(self) -> str:
        return AUTHENTICATED if self.token else ANONYMOUS

    @property
    def is_authenticated(self) -> bool:
        return self.state == AUTHENTICATED

    def begin(self, token: str, admin: Admin) -> None:
        """Enter `authenticated`: persist the token and admin identity together."""
        self.storage.set_item(AUTH_TOKEN_KEY, token)
        self.storage.set_item(ADMIN_DATA_KEY, admin.to_json())
        logger.info("Authenticated as %s", admin.email)

    def clear(self) -> None:
        """Return to `anonymous`. Safe to call when already anonymous."""
        self.storage.remove_item(AUTH_TOKEN_KEY)
        self.storage.remove_item(ADMIN_DATA_KEY)
