# Overview: Service-layer operations for event orders; validates the order form and checks returned totals.

"""
Order creation boundary

The server prices the order and persists each line's subtotal. The client
still checks what comes back: an accepted order whose totalAmount differs
from the sum of its line subtotals is rejected with DecodeError rather than
shown to the user.

When the caller passes the menu it showed the customer, the estimated total
is compared with the server's. A difference is only logged: prices may
legitimately change between fetching the menu and submitting.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from ..api.gateway import DecodeError
from ..computations import TOTAL_TOLERANCE, items_subtotal, order_total, order_totals_consistent
from ..models import MenuItem, Order, OrderForm
from ..validation import enforce_order_status
from .base import ResourceService


logger = logging.getLogger(__name__)


def ensure_order_totals(order: Order) -> Order:
    if not order_totals_consistent(order):
        raise DecodeError(
            f"Order {order.id} total {order.total_amount:.2f} does not match "
            f"its line subtotals {items_subtotal(order.items):.2f}"
        )
    return order


class OrdersService(ResourceService):
    async def list(self) -> List[Order]:
        data = await self.gateway.get("/orders")
        return self.records(Order, data)

    async def get(self, order_id: str) -> Order:
        data = await self.gateway.get(f"/orders/{order_id}")
        return self.record(Order, data)

    async def create(self, form: OrderForm, menu_items: Optional[Iterable[MenuItem]] = None) -> Order:
        form.validate()
        estimated = order_total(form.selections, menu_items) if menu_items is not None else None

        data = await self.gateway.post("/orders", form.to_dict())
        order = ensure_order_totals(self.record(Order, data))

        if estimated is not None and abs(estimated - order.total_amount) > TOTAL_TOLERANCE:
            logger.warning(
                "Order %s priced at %.2f by the server; form estimated %.2f",
                order.id, order.total_amount, estimated,
            )
        return order

    async def update_status(self, order_id: str, status: str) -> Order:
        # Membership only; the server decides which transitions are legal
        enforce_order_status(status)
        data = await self.gateway.patch(f"/orders/{order_id}/status", {"status": status})
        return self.record(Order, data)

    async def delete(self, order_id: str) -> None:
        await self.gateway.delete(f"/orders/{order_id}")
