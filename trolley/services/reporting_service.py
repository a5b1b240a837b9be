# Overview: Service-layer operations for sales and reports; aggregation happens server-side, this only shapes queries.

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional, Union

from ..models import (
    DailySalesReport,
    MonthlySalesReport,
    ProfitLossReport,
    Sale,
    SalesChart,
    TopSellingItem,
)
from ..time_utils import parse_iso_date, to_iso_date
from ..validation import ValidationError, enforce_date_range, enforce_report_period
from .base import ResourceService


DateArg = Union[date, str]


def _as_date(value: Optional[DateArg], field: str) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if value is None or isinstance(value, date):
        return value
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field} must be a YYYY-MM-DD date")


def _range_params(start: Optional[DateArg], end: Optional[DateArg]) -> dict:
    start_d = _as_date(start, "startDate")
    end_d = _as_date(end, "endDate")
    enforce_date_range(start_d, end_d)
    return {"startDate": to_iso_date(start_d), "endDate": to_iso_date(end_d)}


class SalesService(ResourceService):
    async def list(self, start: Optional[DateArg] = None, end: Optional[DateArg] = None) -> List[Sale]:
        """All sales, or only those between `start` and `end` (both inclusive, both or neither)."""
        data = await self.gateway.get("/sales", params=_range_params(start, end))
        return self.records(Sale, data)


class ReportsService(ResourceService):
    async def daily_sales(self, day: DateArg) -> DailySalesReport:
        day_d = _as_date(day, "date")
        if day_d is None:
            raise ValidationError("date is required")
        data = await self.gateway.get("/reports/daily-sales", params={"date": to_iso_date(day_d)})
        return self.record(DailySalesReport, data)

    async def monthly_sales(self, month: int, year: int) -> MonthlySalesReport:
        if not 1 <= int(month) <= 12:
            raise ValidationError("month must be between 1 and 12")
        data = await self.gateway.get(
            "/reports/monthly-sales", params={"month": int(month), "year": int(year)}
        )
        return self.record(MonthlySalesReport, data)

    async def profit_loss(self, start: DateArg, end: DateArg) -> ProfitLossReport:
        if start is None or end is None:
            raise ValidationError("startDate and endDate are required")
        data = await self.gateway.get("/reports/profit-loss", params=_range_params(start, end))
        return self.record(ProfitLossReport, data)

    async def top_selling(self, period: str) -> List[TopSellingItem]:
        enforce_report_period(period)
        data = await self.gateway.get("/reports/top-selling", params={"period": period})
        return self.records(TopSellingItem, data)

    async def sales_chart(self, period: str) -> SalesChart:
        enforce_report_period(period)
        data = await self.gateway.get("/reports/sales-chart", params={"period": period})
        return self.record(SalesChart, data)
