# Overview: Raw-material stock records and the append-only purchase ledger.

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..time_utils import parse_iso_datetime, to_utc_z
from ..validation import enforce_rules_purchase, enforce_rules_raw_product
from .base import as_float, record_id


RAW_PRODUCT_WIRE_FIELDS = {
    "name": "name",
    "category": "category",
    "unit": "unit",
    "cost_per_unit": "costPerUnit",
    "current_stock": "currentStock",
    "minimum_stock": "minimumStock",
    "supplier": "supplier",
}


@dataclass
class RawProduct:
    id: str
    name: str
    category: str
    unit: str
    cost_per_unit: float
    current_stock: float
    minimum_stock: float
    supplier: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RawProduct":
        return cls(
            id=record_id(data),
            name=data.get("name", ""),
            category=data.get("category") or "",
            unit=data.get("unit") or "",
            cost_per_unit=as_float(data.get("costPerUnit")),
            current_stock=as_float(data.get("currentStock")),
            minimum_stock=as_float(data.get("minimumStock")),
            supplier=data.get("supplier"),
            created_at=parse_iso_datetime(data.get("createdAt")),
            updated_at=parse_iso_datetime(data.get("updatedAt")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "unit": self.unit,
            "costPerUnit": self.cost_per_unit,
            "currentStock": self.current_stock,
            "minimumStock": self.minimum_stock,
            "supplier": self.supplier,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }


@dataclass
class RawProductForm:
    name: str
    category: str
    unit: str
    cost_per_unit: float
    current_stock: float = 0
    minimum_stock: float = 0
    supplier: Optional[str] = None

    def validate(self) -> None:
        enforce_rules_raw_product(self.__dict__)

    def to_dict(self) -> dict:
        payload = {
            "name": self.name.strip(),
            "category": self.category.strip(),
            "unit": self.unit.strip(),
            "costPerUnit": self.cost_per_unit,
            "currentStock": self.current_stock,
            "minimumStock": self.minimum_stock,
        }
        if self.supplier:
            payload["supplier"] = self.supplier.strip()
        return payload


@dataclass
class Purchase:
    """Ledger entry: never mutated after creation, only listed or deleted."""
    id: str
    raw_product_id: str
    raw_product_name: str
    quantity: float
    cost_per_unit: float
    total_cost: float
    supplier: str
    purchase_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Purchase":
        return cls(
            id=record_id(data),
            raw_product_id=str(data.get("rawProductId", "")),
            raw_product_name=data.get("rawProductName", ""),
            quantity=as_float(data.get("quantity")),
            cost_per_unit=as_float(data.get("costPerUnit")),
            total_cost=as_float(data.get("totalCost")),
            supplier=data.get("supplier") or "",
            purchase_date=parse_iso_datetime(data.get("purchaseDate")),
            created_at=parse_iso_datetime(data.get("createdAt")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "rawProductId": self.raw_product_id,
            "rawProductName": self.raw_product_name,
            "quantity": self.quantity,
            "costPerUnit": self.cost_per_unit,
            "totalCost": self.total_cost,
            "supplier": self.supplier,
            "purchaseDate": to_utc_z(self.purchase_date),
            "createdAt": to_utc_z(self.created_at),
        }


@dataclass
class PurchaseForm:
    raw_product_id: str
    quantity: float
    cost_per_unit: float
    supplier: str

    def validate(self) -> None:
        enforce_rules_purchase(self.__dict__)

    def to_dict(self) -> dict:
        return {
            "rawProductId": self.raw_product_id,
            "quantity": self.quantity,
            "costPerUnit": self.cost_per_unit,
            "supplier": self.supplier.strip(),
        }
