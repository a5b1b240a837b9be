from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Mapping, Optional

from .constants import EVENT_TYPES, ORDER_STATUSES, REPORT_PERIODS, STOCK_DIRECTIONS


# Maximum price: 9,999,999.99
# Anything above this is a typo, not a catering menu price
MAX_PRICE = 9_999_999.99


class ValidationError(ValueError):
    """Client-side input problem; raised before any network call."""


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def _number(value: Any, field: str) -> float:
    """
    Coerce form input to a number.

    Booleans are rejected even though bool is an int subclass; numeric
    strings (e.g. from a prompt) are accepted.
    """
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise ValidationError(f"{field} must be a number")
        try:
            return float(stripped)
        except ValueError:
            raise ValidationError(f"{field} must be a number")
    raise ValidationError(f"{field} must be a number")


def _integer(value: Any, field: str) -> int:
    number = _number(value, field)
    if isinstance(number, float):
        if not number.is_integer():
            raise ValidationError(f"{field} must be a whole number")
        return int(number)
    return number


def require_fields(
    patch: Mapping[str, Any],
    fields: Iterable[str],
    *,
    partial: bool = False,
    message: str = "Please fill in all required fields",
) -> None:
    """
    Required-field check shared by every form.

    partial=False: create semantics (every field must be present and non-blank)
    partial=True: patch semantics (only provided fields must be non-blank)
    """
    for field in fields:
        if field not in patch:
            if partial:
                continue
            raise ValidationError(message)
        if _is_blank(patch[field]):
            raise ValidationError(message)


def enforce_rules_menu_item(patch: Mapping[str, Any], *, partial: bool = False) -> None:
    require_fields(patch, ("name", "description", "category"), partial=partial)

    if "price" in patch or not partial:
        price = _number(patch.get("price"), "price")
        if price <= 0:
            raise ValidationError("Price must be greater than 0")
        if price > MAX_PRICE:
            raise ValidationError(f"Price cannot exceed {MAX_PRICE:,.2f}")

    if "available" in patch and not isinstance(patch["available"], bool):
        raise ValidationError("available must be true or false")


def enforce_rules_raw_product(patch: Mapping[str, Any], *, partial: bool = False) -> None:
    require_fields(patch, ("name", "category", "unit"), partial=partial)

    if "cost_per_unit" in patch or not partial:
        if _number(patch.get("cost_per_unit"), "cost_per_unit") <= 0:
            raise ValidationError("Cost per unit must be greater than 0")

    for field in ("current_stock", "minimum_stock"):
        if field in patch and _number(patch[field], field) < 0:
            raise ValidationError(f"{field} cannot be negative")


def enforce_rules_order(form: Mapping[str, Any]) -> None:
    """
    Event-order form rules, checked in the order the public form reports them.

    `form["items"]` must already be filtered down to selections with a
    positive quantity.
    """
    require_fields(form, ("customer_name", "customer_email", "customer_phone"))

    if _is_blank(form.get("event_date")):
        raise ValidationError("Please select an event date")

    if form.get("event_type") not in EVENT_TYPES:
        raise ValidationError(f"event_type must be one of: {', '.join(EVENT_TYPES)}")

    guest_count = form.get("guest_count")
    if guest_count is None or _integer(guest_count, "guest_count") <= 0:
        raise ValidationError("Please enter a valid guest count")

    items = form.get("items") or []
    if not items:
        raise ValidationError("Please select at least one menu item")
    for item in items:
        if _is_blank(item.get("menu_item_id")):
            raise ValidationError("menu_item_id is required for each item")
        if _integer(item.get("quantity"), "quantity") <= 0:
            raise ValidationError("quantity must be > 0 for each item")


def enforce_rules_purchase(patch: Mapping[str, Any]) -> None:
    require_fields(patch, ("raw_product_id", "supplier"))
    if _number(patch.get("quantity"), "quantity") <= 0:
        raise ValidationError("quantity must be > 0 for a purchase")
    if _number(patch.get("cost_per_unit"), "cost_per_unit") <= 0:
        raise ValidationError("Cost per unit must be greater than 0")


def enforce_rules_stock_update(quantity: Any, direction: str) -> None:
    # Zero is allowed and leaves stock unchanged; negative amounts must be
    # expressed through direction instead
    if direction not in STOCK_DIRECTIONS:
        raise ValidationError(f"type must be one of: {', '.join(STOCK_DIRECTIONS)}")
    if _number(quantity, "quantity") < 0:
        raise ValidationError("quantity cannot be negative; use type='subtract'")


def enforce_order_status(status: str) -> None:
    if status not in ORDER_STATUSES:
        raise ValidationError(f"status must be one of: {', '.join(ORDER_STATUSES)}")


def enforce_report_period(period: str) -> None:
    if period not in REPORT_PERIODS:
        raise ValidationError(f"period must be one of: {', '.join(REPORT_PERIODS)}")


def enforce_date_range(start: Optional[date], end: Optional[date]) -> None:
    if (start is None) != (end is None):
        raise ValidationError("startDate and endDate must be given together")
    if start is not None and end is not None and start > end:
        raise ValidationError("startDate must be on or before endDate")


def enforce_credentials(email: Optional[str], password: Optional[str]) -> None:
    if _is_blank(email) or _is_blank(password):
        raise ValidationError("Please fill in all fields")
