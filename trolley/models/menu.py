# Overview: Menu item records and the admin product form.

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..time_utils import parse_iso_datetime, to_utc_z
from ..validation import enforce_rules_menu_item
from .base import as_float, record_id


MENU_ITEM_WIRE_FIELDS = {
    "name": "name",
    "description": "description",
    "price": "price",
    "category": "category",
    "available": "available",
}


@dataclass
class MenuItem:
    id: str
    name: str
    description: str
    price: float
    category: str
    available: bool = True
    image: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MenuItem":
        return cls(
            id=record_id(data),
            name=data.get("name", ""),
            description=data.get("description") or "",
            price=as_float(data.get("price")),
            category=data.get("category") or "",
            available=bool(data.get("available", True)),
            image=data.get("image"),
            created_at=parse_iso_datetime(data.get("createdAt")),
            updated_at=parse_iso_datetime(data.get("updatedAt")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "category": self.category,
            "image": self.image,
            "available": self.available,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }


@dataclass
class MenuItemForm:
    """Create/replace payload for a menu item (admin Products screen)."""
    name: str
    description: str
    price: float
    category: str
    available: bool = True

    def validate(self) -> None:
        enforce_rules_menu_item(self.__dict__)

    def to_dict(self) -> dict:
        return {
            "name": self.name.strip(),
            "description": self.description.strip(),
            "price": self.price,
            "category": self.category.strip(),
            "available": self.available,
        }
