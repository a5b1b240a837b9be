# Overview: Event orders, their line items, and the public order form.

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional

from ..time_utils import parse_iso_datetime, to_iso_date, to_utc_z
from ..validation import enforce_rules_order
from .base import as_float, as_int, record_id


@dataclass
class OrderItem:
    """
    One line of a submitted order.

    menu_item_name and price are snapshots taken when the order was created;
    subtotal is persisted by the server and never recomputed from today's
    menu prices.
    """
    menu_item_id: str
    menu_item_name: str
    quantity: int
    price: float
    subtotal: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OrderItem":
        return cls(
            menu_item_id=str(data.get("menuItemId", "")),
            menu_item_name=data.get("menuItemName", ""),
            quantity=as_int(data.get("quantity")),
            price=as_float(data.get("price")),
            subtotal=as_float(data.get("subtotal")),
        )

    def to_dict(self) -> dict:
        return {
            "menuItemId": self.menu_item_id,
            "menuItemName": self.menu_item_name,
            "quantity": self.quantity,
            "price": self.price,
            "subtotal": self.subtotal,
        }


@dataclass
class Order:
    id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    event_type: str
    event_date: Optional[datetime]
    guest_count: int
    items: List[OrderItem]
    total_amount: float
    status: str
    special_requests: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Order":
        return cls(
            id=record_id(data),
            customer_name=data.get("customerName", ""),
            customer_email=data.get("customerEmail", ""),
            customer_phone=data.get("customerPhone", ""),
            event_type=data.get("eventType", "other"),
            event_date=parse_iso_datetime(data.get("eventDate")),
            guest_count=as_int(data.get("guestCount")),
            items=[OrderItem.from_dict(item) for item in data.get("items") or []],
            total_amount=as_float(data.get("totalAmount")),
            status=data.get("status", "pending"),
            special_requests=data.get("specialRequests"),
            created_at=parse_iso_datetime(data.get("createdAt")),
            updated_at=parse_iso_datetime(data.get("updatedAt")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "customerName": self.customer_name,
            "customerEmail": self.customer_email,
            "customerPhone": self.customer_phone,
            "eventType": self.event_type,
            "eventDate": to_iso_date(self.event_date),
            "guestCount": self.guest_count,
            "items": [item.to_dict() for item in self.items],
            "totalAmount": self.total_amount,
            "specialRequests": self.special_requests,
            "status": self.status,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }


@dataclass
class OrderForm:
    """
    Public event-order form.

    `selections` maps menu item id -> quantity, the way the order page
    collects it; zero quantities are dropped when the request is built.
    """
    customer_name: str
    customer_email: str
    customer_phone: str
    event_date: Optional[date | str]
    guest_count: int
    event_type: str = "marriage"
    selections: Dict[str, int] = field(default_factory=dict)
    special_requests: Optional[str] = None

    def selected_items(self) -> List[dict]:
        return [
            {"menu_item_id": item_id, "quantity": quantity}
            for item_id, quantity in self.selections.items()
            if quantity and quantity > 0
        ]

    def validate(self) -> None:
        enforce_rules_order({
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "customer_phone": self.customer_phone,
            "event_type": self.event_type,
            "event_date": self.event_date,
            "guest_count": self.guest_count,
            "items": self.selected_items(),
        })

    def to_dict(self) -> dict:
        payload = {
            "customerName": self.customer_name.strip(),
            "customerEmail": self.customer_email.strip(),
            "customerPhone": self.customer_phone.strip(),
            "eventType": self.event_type,
            "eventDate": to_iso_date(self.event_date),
            "guestCount": int(self.guest_count),
            "items": [
                {"menuItemId": item["menu_item_id"], "quantity": int(item["quantity"])}
                for item in self.selected_items()
            ],
        }
        if self.special_requests:
            payload["specialRequests"] = self.special_requests
        return payload

