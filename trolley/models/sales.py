# Overview: Sales projections of completed orders and the report shapes built from them.

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Mapping, Optional

from ..time_utils import parse_iso_datetime, to_utc_z
from .base import as_float, as_int, record_id
from .orders import OrderItem


@dataclass
class Sale:
    """Read-only projection of a completed order, used for reporting."""
    id: str
    order_id: str
    items: List[OrderItem]
    total_amount: float
    sale_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Sale":
        return cls(
            id=record_id(data),
            order_id=str(data.get("orderId", "")),
            items=[OrderItem.from_dict(item) for item in data.get("items") or []],
            total_amount=as_float(data.get("totalAmount")),
            sale_date=parse_iso_datetime(data.get("saleDate")),
            created_at=parse_iso_datetime(data.get("createdAt")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "orderId": self.order_id,
            "items": [item.to_dict() for item in self.items],
            "totalAmount": self.total_amount,
            "saleDate": to_utc_z(self.sale_date),
            "createdAt": to_utc_z(self.created_at),
        }


@dataclass
class TopSellingItem:
    item_name: str
    quantity: int
    revenue: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TopSellingItem":
        return cls(
            item_name=data.get("itemName", ""),
            quantity=as_int(data.get("quantity")),
            revenue=as_float(data.get("revenue")),
        )


@dataclass
class DailySalesReport:
    date: str
    total_sales: float
    total_orders: int
    top_selling_items: List[TopSellingItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DailySalesReport":
        return cls(
            date=data.get("date", ""),
            total_sales=as_float(data.get("totalSales")),
            total_orders=as_int(data.get("totalOrders")),
            top_selling_items=[
                TopSellingItem.from_dict(item) for item in data.get("topSellingItems") or []
            ],
        )


@dataclass
class MonthlySalesReport:
    month: str
    year: int
    total_sales: float
    total_orders: int
    daily_breakdown: List[DailySalesReport] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MonthlySalesReport":
        return cls(
            month=str(data.get("month", "")),
            year=as_int(data.get("year")),
            total_sales=as_float(data.get("totalSales")),
            total_orders=as_int(data.get("totalOrders")),
            daily_breakdown=[
                DailySalesReport.from_dict(day) for day in data.get("dailyBreakdown") or []
            ],
        )


@dataclass
class ProfitLossReport:
    period: str
    total_revenue: float
    total_costs: float
    gross_profit: float
    net_profit: float
    profit_margin: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProfitLossReport":
        return cls(
            period=data.get("period", ""),
            total_revenue=as_float(data.get("totalRevenue")),
            total_costs=as_float(data.get("totalCosts")),
            gross_profit=as_float(data.get("grossProfit")),
            net_profit=as_float(data.get("netProfit")),
            profit_margin=as_float(data.get("profitMargin")),
        )


@dataclass
class SalesChart:
    labels: List[str]
    data: List[float]

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SalesChart":
        return cls(
            labels=[str(label) for label in payload.get("labels") or []],
            data=[as_float(value) for value in payload.get("data") or []],
        )

    def points(self) -> List[tuple]:
        return list(zip(self.labels, self.data))
