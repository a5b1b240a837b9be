# Overview: Pure derived-state helpers over already-fetched records (totals, stock flags, display mapping).

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional

from .constants import DEFAULT_STATUS_COLOR, STATUS_COLORS
from .models import MenuItem, Order, OrderItem, RawProduct
from .time_utils import format_display_date, format_display_datetime

__all__ = [
    'line_subtotal', 'order_total', 'items_subtotal', 'order_totals_consistent',
    'is_low_stock', 'low_stock_products', 'status_color', 'available_menu_items',
    'profit_margin', 'DashboardSummary', 'dashboard_summary',
    'format_display_date', 'format_display_datetime',
]

# Totals are compared to the cent
TOTAL_TOLERANCE = 0.005


def line_subtotal(quantity: int, price: float) -> float:
    return round(quantity * price, 2)


def order_total(selections: Mapping[str, int], menu_items: Iterable[MenuItem]) -> float:
    """
    Estimated total of an order form: sum of quantity x current unit price.

    Ids not present in `menu_items` contribute nothing.
    """
    prices = {item.id: item.price for item in menu_items}
    total = 0.0
    for item_id, quantity in selections.items():
        if not quantity or quantity <= 0:
            continue
        price = prices.get(item_id)
        if price is None:
            continue
        total += line_subtotal(quantity, price)
    return round(total, 2)


def items_subtotal(items: Iterable[OrderItem]) -> float:
    return round(sum(item.subtotal for item in items), 2)


def order_totals_consistent(order: Order) -> bool:
    """True when the stored total equals the sum of the persisted line subtotals."""
    return abs(items_subtotal(order.items) - order.total_amount) <= TOTAL_TOLERANCE


def is_low_stock(product: RawProduct) -> bool:
    # Inclusive: stock sitting exactly at the minimum already needs reordering
    return product.current_stock <= product.minimum_stock


def low_stock_products(products: Iterable[RawProduct]) -> List[RawProduct]:
    return [product for product in products if is_low_stock(product)]


def status_color(status: Optional[str]) -> str:
    """Display colour token for an order status; unknown values fall back to the default token."""
    return STATUS_COLORS.get(status, DEFAULT_STATUS_COLOR) if isinstance(status, str) else DEFAULT_STATUS_COLOR


def available_menu_items(items: Iterable[MenuItem]) -> List[MenuItem]:
    """Items the public order form may offer."""
    return [item for item in items if item.available]


def profit_margin(revenue: float, profit: float) -> float:
    if not revenue:
        return 0.0
    return round(profit / revenue * 100, 2)


@dataclass(frozen=True)
class DashboardSummary:
    total_orders: int
    total_revenue: float
    total_products: int
    pending_orders: int


def dashboard_summary(orders: Iterable[Order], menu_items: Iterable[MenuItem]) -> DashboardSummary:
    """
    Admin dashboard headline numbers.

    Revenue counts every order that was not cancelled.
    """
    orders = list(orders)
    return DashboardSummary(
        total_orders=len(orders),
        total_revenue=round(sum(o.total_amount for o in orders if o.status != "cancelled"), 2),
        total_products=len(list(menu_items)),
        pending_orders=sum(1 for o in orders if o.status == "pending"),
    )
