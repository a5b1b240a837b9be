# Overview: Admin identity and login payloads.

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..time_utils import parse_iso_datetime, to_utc_z
from ..validation import enforce_credentials
from .base import record_id


@dataclass
class Admin:
    id: str
    email: str
    name: str
    role: str = "admin"
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Admin":
        return cls(
            id=record_id(data),
            email=data.get("email", ""),
            name=data.get("name", ""),
            role=data.get("role", "admin"),
            created_at=parse_iso_datetime(data.get("createdAt")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
            "createdAt": to_utc_z(self.created_at),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, raw: str) -> "Admin":
        return cls.from_dict(json.loads(raw))


@dataclass
class LoginCredentials:
    email: str
    password: str

    def validate(self) -> None:
        enforce_credentials(self.email, self.password)

    def to_dict(self) -> dict:
        return {"email": self.email.strip(), "password": self.password}


@dataclass
class AuthResponse:
    token: str
    admin: Admin

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AuthResponse":
        token = data.get("token")
        # Only a non-empty string is a usable bearer token
        if not isinstance(token, str) or not token.strip():
            token = ""
        return cls(token=token, admin=Admin.from_dict(data.get("admin") or {}))
