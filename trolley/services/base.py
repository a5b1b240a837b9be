# Overview: Shared plumbing for resource services (gateway handle, record decoding, partial-update payloads).

from __future__ import annotations

from typing import Any, Callable, List, Mapping, Type, TypeVar

from ..api.gateway import ApiGateway, DecodeError
from ..models.base import to_wire
from ..validation import ValidationError


R = TypeVar("R")


class ResourceService:
    """Base for the per-resource operation sets; every method is one HTTP call."""

    def __init__(self, gateway: ApiGateway):
        self.gateway = gateway

    @staticmethod
    def record(model: Type[R], data: Any) -> R:
        """
        Decode one envelope `data` object into `model`.

        A payload that is not a JSON object, or whose fields cannot be
        coerced, is a DecodeError like any other envelope violation.
        """
        if not isinstance(data, Mapping):
            raise DecodeError(f"Expected a {model.__name__} object, got {type(data).__name__}")
        try:
            return model.from_dict(data)
        except (AttributeError, TypeError, ValueError) as exc:
            raise DecodeError(f"Malformed {model.__name__} payload: {exc}") from exc

    @classmethod
    def records(cls, model: Type[R], data: Any) -> List[R]:
        if not isinstance(data, list):
            raise DecodeError(f"Expected a list of {model.__name__}, got {type(data).__name__}")
        return [cls.record(model, item) for item in data]

    @staticmethod
    def partial_payload(
        changes: Mapping[str, Any],
        rules: Callable[..., None],
        wire_fields: Mapping[str, str],
    ) -> dict:
        """
        Validate a snake_case change set with patch semantics and translate it
        to the camelCase body of a partial update.
        """
        if not changes:
            raise ValidationError("No fields to update")
        rules(changes, partial=True)
        return to_wire(changes, wire_fields)
