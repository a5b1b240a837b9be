# Overview: Shared wire-format helpers for domain records (camelCase JSON <-> snake_case attributes).

# trolley/models/base.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Mapping, Optional, TypeVar

from ..validation import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Envelope(Generic[T]):
    """Uniform `{success, data, message, error}` wrapper of every API response."""
    success: bool
    data: Optional[T] = None
    message: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Envelope":
        return cls(
            success=bool(payload.get("success", False)),
            data=payload.get("data"),
            message=payload.get("message"),
            error=payload.get("error"),
        )

    @property
    def has_data(self) -> bool:
        return self.data is not None

    def server_message(self) -> Optional[str]:
        return self.message or self.error


def record_id(data: Mapping[str, Any]) -> str:
    """Backend ids are opaque; some collections expose them as `_id`."""
    value = data.get("id", data.get("_id"))
    return "" if value is None else str(value)


def as_float(value: Any, default: float = 0.0) -> float:
    if value is None or value == "":
        return default
    return float(value)


def as_int(value: Any, default: int = 0) -> int:
    if value is None or value == "":
        return default
    return int(value)


def to_wire(changes: Mapping[str, Any], wire_fields: Mapping[str, str]) -> dict:
    """
    Translate a snake_case change set into its camelCase wire payload.

    Only fields in `wire_fields` are writable; anything else is rejected
    before a request is built.
    """
    payload: dict = {}
    for key, value in changes.items():
        if key not in wire_fields:
            raise ValidationError(f"Field not allowed: {key}")
        payload[wire_fields[key]] = value
    return payload
