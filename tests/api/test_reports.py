# Trolley API Tests - Sales & Reports
#
# Tests for:
# - Sales ledger with optional date range
# - Daily / monthly / profit-loss reports
# - Top-selling and chart series by period

from datetime import date, datetime

import pytest

from tests.conftest import order_payload
from trolley.validation import ValidationError


pytestmark = pytest.mark.anyio


def sale_payload(sale_id="s1", total=250):
    order = order_payload()
    return {
        "id": sale_id,
        "orderId": "o1",
        "items": order["items"],
        "totalAmount": total,
        "saleDate": "2026-10-19T06:00:00.000Z",
        "createdAt": "2026-10-19T06:00:00.000Z",
    }


class TestSales:

    @pytest.mark.sales
    async def test_list_all(self, admin_client, backend):
        backend.on("GET", "/sales", [sale_payload()])

        sales = await admin_client.sales.list()

        assert not backend.last_request.url.query
        assert sales[0].order_id == "o1"
        assert sales[0].items[0].menu_item_name == "Paneer Tikka"

    @pytest.mark.smoke
    @pytest.mark.sales
    async def test_list_in_range(self, admin_client, backend):
        backend.on("GET", "/sales", [])

        await admin_client.sales.list(date(2026, 10, 1), "2026-10-31")

        params = backend.last_request.url.params
        assert params["startDate"] == "2026-10-01"
        assert params["endDate"] == "2026-10-31"

    @pytest.mark.sales
    async def test_range_bounds(self, admin_client, backend):
        with pytest.raises(ValidationError, match="given together"):
            await admin_client.sales.list(date(2026, 10, 1), None)
        with pytest.raises(ValidationError, match="on or before"):
            await admin_client.sales.list("2026-10-31", "2026-10-01")
        with pytest.raises(ValidationError, match="YYYY-MM-DD"):
            await admin_client.sales.list("yesterday", "2026-10-01")
        assert backend.requests == []


class TestReports:

    @pytest.mark.smoke
    @pytest.mark.reports
    async def test_daily_sales(self, admin_client, backend):
        backend.on("GET", "/reports/daily-sales", {
            "date": "2026-10-19",
            "totalSales": 12500,
            "totalOrders": 3,
            "topSellingItems": [{"itemName": "Paneer Tikka", "quantity": 40, "revenue": 4000}],
        })

        report = await admin_client.reports.daily_sales(datetime(2026, 10, 19, 18, 30))

        assert backend.last_request.url.params["date"] == "2026-10-19"
        assert report.total_orders == 3
        assert report.top_selling_items[0].item_name == "Paneer Tikka"

    @pytest.mark.reports
    async def test_monthly_sales(self, admin_client, backend):
        backend.on("GET", "/reports/monthly-sales", {
            "month": "October",
            "year": 2026,
            "totalSales": 90000,
            "totalOrders": 12,
            "dailyBreakdown": [{"date": "2026-10-19", "totalSales": 12500, "totalOrders": 3}],
        })

        report = await admin_client.reports.monthly_sales(10, 2026)

        params = backend.last_request.url.params
        assert (params["month"], params["year"]) == ("10", "2026")
        assert report.daily_breakdown[0].total_sales == 12500

    @pytest.mark.reports
    @pytest.mark.parametrize("month", [0, 13])
    async def test_monthly_sales_month_range(self, admin_client, backend, month):
        with pytest.raises(ValidationError, match="between 1 and 12"):
            await admin_client.reports.monthly_sales(month, 2026)
        assert backend.requests == []

    @pytest.mark.reports
    async def test_profit_loss(self, admin_client, backend):
        backend.on("GET", "/reports/profit-loss", {
            "period": "2026-10-01 to 2026-10-31",
            "totalRevenue": 90000,
            "totalCosts": 54000,
            "grossProfit": 36000,
            "netProfit": 36000,
            "profitMargin": 40,
        })

        report = await admin_client.reports.profit_loss("2026-10-01", "2026-10-31")

        assert backend.last_request.url.params["startDate"] == "2026-10-01"
        assert report.profit_margin == 40
        assert report.net_profit == 36000

    @pytest.mark.reports
    async def test_profit_loss_requires_both_dates(self, admin_client, backend):
        with pytest.raises(ValidationError):
            await admin_client.reports.profit_loss(None, "2026-10-31")
        assert backend.requests == []

    @pytest.mark.reports
    async def test_top_selling(self, admin_client, backend):
        backend.on("GET", "/reports/top-selling", [
            {"itemName": "Paneer Tikka", "quantity": 40, "revenue": 4000},
            {"itemName": "Dal Makhani", "quantity": 30, "revenue": 1500},
        ])

        items = await admin_client.reports.top_selling("weekly")

        assert backend.last_request.url.params["period"] == "weekly"
        assert [i.item_name for i in items] == ["Paneer Tikka", "Dal Makhani"]

    @pytest.mark.reports
    async def test_sales_chart(self, admin_client, backend):
        backend.on("GET", "/reports/sales-chart", {"labels": ["Mon", "Tue"], "data": [1200, 800.5]})

        chart = await admin_client.reports.sales_chart("daily")

        assert chart.points() == [("Mon", 1200.0), ("Tue", 800.5)]

    @pytest.mark.reports
    async def test_unknown_period(self, admin_client, backend):
        with pytest.raises(ValidationError, match="period must be one of"):
            await admin_client.reports.top_selling("yearly")
        with pytest.raises(ValidationError):
            await admin_client.reports.sales_chart("hourly")
        assert backend.requests == []
