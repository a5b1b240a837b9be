# Overview: Click command groups that compose the client into a terminal front-end for the catering backend.

# trolley/cli.py
# Commands Legend:
# Prereqs:
# - pip install -e .
# - Point at a backend: TROLLEY_API_BASE_URL=http://localhost:5000/api
#
# Auth (admin commands need a stored session):
# - trolley auth login --email admin@x.com
#   Prompts for the password and stores token + admin identity.
# - trolley auth logout
# - trolley auth whoami
#   Verifies the stored token with the server.
#
# Public:
# - trolley menu list --available
# - trolley menu categories
# - trolley orders place --name "Asha" --email a@x.com --phone 999 --event-date 2026-12-01 --guests 150 --item m1=2
#   Prints the estimated total, then submits the order.
#
# Admin:
# - trolley menu add|update|delete ...
# - trolley orders list | show ID | status ID confirmed | delete ID --yes
# - trolley stock list --low
# - trolley stock adjust ID 10 --add | --subtract
# - trolley purchases list | record ... | delete ID --yes
# - trolley sales list --start 2026-10-01 --end 2026-10-31
# - trolley reports daily 2026-10-19 | monthly 10 2026 | profit-loss START END | top-selling weekly | chart monthly
# - trolley dashboard

from __future__ import annotations

import asyncio
import logging

import click

from . import create_client
from .api.gateway import ApiError, AuthError
from .computations import dashboard_summary, is_low_stock, order_total, profit_margin, status_color
from .config import Config
from .constants import EVENT_TYPES, ORDER_STATUSES, REPORT_PERIODS
from .models import MenuItemForm, OrderForm, PurchaseForm, RawProductForm
from .time_utils import format_display_date, format_display_datetime
from .validation import ValidationError


logger = logging.getLogger(__name__)

EXIT_FAILED = 1
EXIT_LOGIN_REQUIRED = 2


def _money(amount: float) -> str:
    return f"₹{amount:,.2f}"


def _when(ctx, value) -> str:
    if value is None:
        return "-"
    return format_display_datetime(value, ctx.obj["config"].DISPLAY_LOCALE)


def _prompt_login() -> None:
    click.echo("Session expired or not authorised. Log in again: trolley auth login", err=True)


def _run(ctx, action, *, require_auth: bool = False):
    """
    Run `action(client)` on a fresh client and event loop.

    Validation and transport failures are reported and end the command;
    a 401 has already been announced by the unauthorized listener.
    """
    async def main():
        async with ctx.obj["client_factory"]() as client:
            client.on_unauthorized(_prompt_login)
            if require_auth and not client.session.is_authenticated:
                click.echo("Please log in first: trolley auth login", err=True)
                ctx.exit(EXIT_LOGIN_REQUIRED)
            return await action(client)

    try:
        return asyncio.run(main())
    except ValidationError as exc:
        click.echo(f"ERROR {exc}", err=True)
        ctx.exit(EXIT_FAILED)
    except AuthError:
        ctx.exit(EXIT_LOGIN_REQUIRED)
    except ApiError as exc:
        logger.debug("Failed to run %s", ctx.command_path, exc_info=True)
        click.echo(f"ERROR {exc.message}", err=True)
        ctx.exit(EXIT_FAILED)


@click.group()
@click.pass_context
def cli(ctx):
    """Catering order management from the terminal."""
    ctx.ensure_object(dict)
    config = ctx.obj.setdefault("config", Config)
    ctx.obj.setdefault("client_factory", lambda: create_client(config))


# =============================================================================
# AUTH
# =============================================================================

@cli.group('auth')
def auth_group():
    """Admin login session."""


@auth_group.command('login')
@click.option('--email', prompt=True)
@click.option('--password', prompt=True, hide_input=True)
@click.pass_context
def login(ctx, email, password):
    """Log in and store the session token."""
    async def action(client):
        return await client.auth.login(email, password)

    auth = _run(ctx, action)
    click.echo(f"PASS Logged in as {auth.admin.name} <{auth.admin.email}> ({auth.admin.role})")


@auth_group.command('logout')
@click.pass_context
def logout(ctx):
    """Log out; safe to run when already logged out."""
    async def action(client):
        await client.auth.logout()

    _run(ctx, action)
    click.echo("PASS Logged out")


@auth_group.command('whoami')
@click.pass_context
def whoami(ctx):
    """Verify the stored session with the server."""
    async def action(client):
        return await client.restore_session()

    admin = _run(ctx, action)
    if admin is None:
        click.echo("anonymous")
    else:
        click.echo(f"{admin.name} <{admin.email}> ({admin.role})")


# =============================================================================
# MENU
# =============================================================================

@cli.group('menu')
def menu_group():
    """Menu items."""


@menu_group.command('list')
@click.option('--available', is_flag=True, help='Only items offered on the order form')
@click.pass_context
def menu_list(ctx, available):
    async def action(client):
        if available:
            return await client.menu.list_available()
        return await client.menu.list()

    for item in _run(ctx, action):
        flag = "" if item.available else "  [unavailable]"
        click.echo(f"{item.id}  {item.name}  ({item.category})  {_money(item.price)}{flag}")


@menu_group.command('categories')
@click.pass_context
def menu_categories(ctx):
    async def action(client):
        return await client.menu.categories()

    for category in _run(ctx, action):
        click.echo(category)


@menu_group.command('show')
@click.argument('item_id')
@click.pass_context
def menu_show(ctx, item_id):
    async def action(client):
        return await client.menu.get(item_id)

    item = _run(ctx, action)
    click.echo(f"{item.name} ({item.category}) {_money(item.price)}")
    click.echo(item.description)
    click.echo(f"Available: {'yes' if item.available else 'no'}  Updated: {_when(ctx, item.updated_at)}")


@menu_group.command('add')
@click.option('--name', required=True)
@click.option('--description', required=True)
@click.option('--price', type=float, required=True)
@click.option('--category', required=True)
@click.option('--unavailable', is_flag=True)
@click.pass_context
def menu_add(ctx, name, description, price, category, unavailable):
    form = MenuItemForm(
        name=name, description=description, price=price, category=category,
        available=not unavailable,
    )

    async def action(client):
        return await client.menu.create(form)

    item = _run(ctx, action, require_auth=True)
    click.echo(f"PASS Created menu item {item.name} (ID: {item.id})")


@menu_group.command('update')
@click.argument('item_id')
@click.option('--name')
@click.option('--description')
@click.option('--price', type=float)
@click.option('--category')
@click.option('--available/--unavailable', default=None)
@click.pass_context
def menu_update(ctx, item_id, **fields):
    changes = {key: value for key, value in fields.items() if value is not None}

    async def action(client):
        return await client.menu.update(item_id, changes)

    item = _run(ctx, action, require_auth=True)
    click.echo(f"PASS Updated menu item {item.name} (ID: {item.id})")


@menu_group.command('delete')
@click.argument('item_id')
@click.option('--yes', is_flag=True, help='Confirm deletion')
@click.pass_context
def menu_delete(ctx, item_id, yes):
    if not yes:
        click.confirm(f"Delete menu item {item_id}?", abort=True)

    async def action(client):
        await client.menu.delete(item_id)

    _run(ctx, action, require_auth=True)
    click.echo(f"PASS Deleted menu item {item_id}")


# =============================================================================
# ORDERS
# =============================================================================

@cli.group('orders')
def orders_group():
    """Event orders."""


@orders_group.command('list')
@click.pass_context
def orders_list(ctx):
    async def action(client):
        return await client.orders.list()

    for order in _run(ctx, action, require_auth=True):
        click.echo(
            f"{order.id}  {order.customer_name}  {order.event_type}  "
            f"{format_display_date(order.event_date, ctx.obj['config'].DISPLAY_LOCALE) if order.event_date else '-'}  "
            f"{_money(order.total_amount)}  {order.status} [{status_color(order.status)}]"
        )


@orders_group.command('show')
@click.argument('order_id')
@click.pass_context
def orders_show(ctx, order_id):
    async def action(client):
        return await client.orders.get(order_id)

    order = _run(ctx, action, require_auth=True)
    click.echo(f"Order {order.id}  {order.status} [{status_color(order.status)}]")
    click.echo(f"Customer: {order.customer_name} <{order.customer_email}> {order.customer_phone}")
    click.echo(f"Event: {order.event_type}, {order.guest_count} guests, {_when(ctx, order.event_date)}")
    for line in order.items:
        click.echo(f"  {line.quantity} x {line.menu_item_name} @ {_money(line.price)} = {_money(line.subtotal)}")
    click.echo(f"Total: {_money(order.total_amount)}")
    if order.special_requests:
        click.echo(f"Special requests: {order.special_requests}")
    click.echo(f"Placed: {_when(ctx, order.created_at)}")


def _parse_selections(items) -> dict:
    selections = {}
    for raw in items:
        item_id, sep, quantity = raw.partition("=")
        if not sep or not item_id:
            raise click.BadParameter(f"expected MENU_ITEM_ID=QUANTITY, got {raw!r}", param_hint="--item")
        try:
            selections[item_id] = selections.get(item_id, 0) + int(quantity)
        except ValueError:
            raise click.BadParameter(f"quantity must be a whole number in {raw!r}", param_hint="--item")
    return selections


@orders_group.command('place')
@click.option('--name', 'customer_name', required=True)
@click.option('--email', 'customer_email', required=True)
@click.option('--phone', 'customer_phone', required=True)
@click.option('--event-type', type=click.Choice(EVENT_TYPES), default='marriage', show_default=True)
@click.option('--event-date', required=True, help='YYYY-MM-DD')
@click.option('--guests', 'guest_count', type=int, required=True)
@click.option('--item', 'items', multiple=True, help='MENU_ITEM_ID=QUANTITY (repeatable)')
@click.option('--requests', 'special_requests')
@click.pass_context
def orders_place(ctx, customer_name, customer_email, customer_phone, event_type,
                 event_date, guest_count, items, special_requests):
    """Submit an event order (no login needed)."""
    form = OrderForm(
        customer_name=customer_name,
        customer_email=customer_email,
        customer_phone=customer_phone,
        event_type=event_type,
        event_date=event_date,
        guest_count=guest_count,
        selections=_parse_selections(items),
        special_requests=special_requests,
    )

    async def action(client):
        form.validate()
        menu_items = await client.menu.list_available()
        click.echo(f"Estimated total: {_money(order_total(form.selections, menu_items))}")
        return await client.orders.create(form, menu_items)

    order = _run(ctx, action)
    click.echo(f"PASS Order {order.id} submitted, total {_money(order.total_amount)} ({order.status})")


@orders_group.command('status')
@click.argument('order_id')
@click.argument('status', type=click.Choice(ORDER_STATUSES))
@click.pass_context
def orders_status(ctx, order_id, status):
    async def action(client):
        return await client.orders.update_status(order_id, status)

    order = _run(ctx, action, require_auth=True)
    click.echo(f"PASS Order {order.id} is now {order.status}")


@orders_group.command('delete')
@click.argument('order_id')
@click.option('--yes', is_flag=True, help='Confirm deletion')
@click.pass_context
def orders_delete(ctx, order_id, yes):
    if not yes:
        click.confirm(f"Delete order {order_id}?", abort=True)

    async def action(client):
        await client.orders.delete(order_id)

    _run(ctx, action, require_auth=True)
    click.echo(f"PASS Deleted order {order_id}")


# =============================================================================
# RAW PRODUCTS / PURCHASES
# =============================================================================

@cli.group('stock')
def stock_group():
    """Raw-material inventory."""


def _stock_line(product) -> str:
    low = "  LOW STOCK" if is_low_stock(product) else ""
    return (
        f"{product.id}  {product.name}  ({product.category})  "
        f"{product.current_stock:g}/{product.minimum_stock:g} {product.unit}  "
        f"{_money(product.cost_per_unit)}/{product.unit}{low}"
    )


@stock_group.command('list')
@click.option('--low', is_flag=True, help='Only products at or below their minimum')
@click.pass_context
def stock_list(ctx, low):
    async def action(client):
        if low:
            return await client.raw_products.list_low_stock()
        return await client.raw_products.list()

    for product in _run(ctx, action, require_auth=True):
        click.echo(_stock_line(product))


@stock_group.command('show')
@click.argument('product_id')
@click.pass_context
def stock_show(ctx, product_id):
    async def action(client):
        return await client.raw_products.get(product_id)

    product = _run(ctx, action, require_auth=True)
    click.echo(_stock_line(product))
    if product.supplier:
        click.echo(f"Supplier: {product.supplier}")


@stock_group.command('add')
@click.option('--name', required=True)
@click.option('--category', required=True)
@click.option('--unit', required=True)
@click.option('--cost', 'cost_per_unit', type=float, required=True)
@click.option('--stock', 'current_stock', type=float, default=0, show_default=True)
@click.option('--minimum', 'minimum_stock', type=float, default=0, show_default=True)
@click.option('--supplier')
@click.pass_context
def stock_add(ctx, **fields):
    form = RawProductForm(**fields)

    async def action(client):
        return await client.raw_products.create(form)

    product = _run(ctx, action, require_auth=True)
    click.echo(f"PASS Created raw product {product.name} (ID: {product.id})")


@stock_group.command('update')
@click.argument('product_id')
@click.option('--name')
@click.option('--category')
@click.option('--unit')
@click.option('--cost', 'cost_per_unit', type=float)
@click.option('--stock', 'current_stock', type=float)
@click.option('--minimum', 'minimum_stock', type=float)
@click.option('--supplier')
@click.pass_context
def stock_update(ctx, product_id, **fields):
    changes = {key: value for key, value in fields.items() if value is not None}

    async def action(client):
        return await client.raw_products.update(product_id, changes)

    product = _run(ctx, action, require_auth=True)
    click.echo(f"PASS Updated raw product {product.name} (ID: {product.id})")


@stock_group.command('adjust')
@click.argument('product_id')
@click.argument('quantity', type=float)
@click.option('--add/--subtract', 'adding', default=True, help='Direction of the movement (default: add)')
@click.pass_context
def stock_adjust(ctx, product_id, quantity, adding):
    """Add or subtract stock."""
    direction = 'add' if adding else 'subtract'

    async def action(client):
        return await client.raw_products.update_stock(product_id, quantity, direction)

    product = _run(ctx, action, require_auth=True)
    click.echo(f"PASS {_stock_line(product)}")


@stock_group.command('delete')
@click.argument('product_id')
@click.option('--yes', is_flag=True, help='Confirm deletion')
@click.pass_context
def stock_delete(ctx, product_id, yes):
    if not yes:
        click.confirm(f"Delete raw product {product_id}?", abort=True)

    async def action(client):
        await client.raw_products.delete(product_id)

    _run(ctx, action, require_auth=True)
    click.echo(f"PASS Deleted raw product {product_id}")


@cli.group('purchases')
def purchases_group():
    """Raw-material purchase ledger."""


@purchases_group.command('list')
@click.pass_context
def purchases_list(ctx):
    async def action(client):
        return await client.purchases.list()

    for purchase in _run(ctx, action, require_auth=True):
        click.echo(
            f"{purchase.id}  {_when(ctx, purchase.purchase_date)}  {purchase.raw_product_name}  "
            f"{purchase.quantity:g} @ {_money(purchase.cost_per_unit)} = {_money(purchase.total_cost)}  "
            f"{purchase.supplier}"
        )


@purchases_group.command('record')
@click.option('--product', 'raw_product_id', required=True)
@click.option('--quantity', type=float, required=True)
@click.option('--cost', 'cost_per_unit', type=float, required=True)
@click.option('--supplier', required=True)
@click.pass_context
def purchases_record(ctx, **fields):
    form = PurchaseForm(**fields)

    async def action(client):
        return await client.purchases.create(form)

    purchase = _run(ctx, action, require_auth=True)
    click.echo(f"PASS Recorded purchase {purchase.id} total {_money(purchase.total_cost)}")


@purchases_group.command('delete')
@click.argument('purchase_id')
@click.option('--yes', is_flag=True, help='Confirm deletion')
@click.pass_context
def purchases_delete(ctx, purchase_id, yes):
    if not yes:
        click.confirm(f"Delete purchase {purchase_id}?", abort=True)

    async def action(client):
        await client.purchases.delete(purchase_id)

    _run(ctx, action, require_auth=True)
    click.echo(f"PASS Deleted purchase {purchase_id}")


# =============================================================================
# SALES / REPORTS
# =============================================================================

@cli.group('sales')
def sales_group():
    """Sales ledger."""


@sales_group.command('list')
@click.option('--start', help='YYYY-MM-DD (with --end)')
@click.option('--end', help='YYYY-MM-DD (with --start)')
@click.pass_context
def sales_list(ctx, start, end):
    async def action(client):
        return await client.sales.list(start, end)

    sales = _run(ctx, action, require_auth=True)
    for sale in sales:
        click.echo(f"{sale.id}  {_when(ctx, sale.sale_date)}  order {sale.order_id}  {_money(sale.total_amount)}")
    click.echo(f"{len(sales)} sales, {_money(sum(sale.total_amount for sale in sales))}")


@cli.group('reports')
def reports_group():
    """Sales and profit reports."""


@reports_group.command('daily')
@click.argument('day')
@click.pass_context
def reports_daily(ctx, day):
    async def action(client):
        return await client.reports.daily_sales(day)

    report = _run(ctx, action, require_auth=True)
    click.echo(f"{report.date}: {report.total_orders} orders, {_money(report.total_sales)}")
    for item in report.top_selling_items:
        click.echo(f"  {item.item_name}  x{item.quantity}  {_money(item.revenue)}")


@reports_group.command('monthly')
@click.argument('month', type=click.IntRange(1, 12))
@click.argument('year', type=int)
@click.pass_context
def reports_monthly(ctx, month, year):
    async def action(client):
        return await client.reports.monthly_sales(month, year)

    report = _run(ctx, action, require_auth=True)
    click.echo(f"{report.month} {report.year}: {report.total_orders} orders, {_money(report.total_sales)}")
    for day in report.daily_breakdown:
        click.echo(f"  {day.date}  {day.total_orders} orders  {_money(day.total_sales)}")


@reports_group.command('profit-loss')
@click.argument('start')
@click.argument('end')
@click.pass_context
def reports_profit_loss(ctx, start, end):
    async def action(client):
        return await client.reports.profit_loss(start, end)

    report = _run(ctx, action, require_auth=True)
    click.echo(f"Period: {report.period}")
    click.echo(f"Revenue: {_money(report.total_revenue)}  Costs: {_money(report.total_costs)}")
    click.echo(f"Gross profit: {_money(report.gross_profit)}  Net profit: {_money(report.net_profit)}")
    margin = report.profit_margin or profit_margin(report.total_revenue, report.net_profit)
    click.echo(f"Margin: {margin:.1f}%")


@reports_group.command('top-selling')
@click.argument('period', type=click.Choice(REPORT_PERIODS))
@click.pass_context
def reports_top_selling(ctx, period):
    async def action(client):
        return await client.reports.top_selling(period)

    for rank, item in enumerate(_run(ctx, action, require_auth=True), start=1):
        click.echo(f"{rank}. {item.item_name}  x{item.quantity}  {_money(item.revenue)}")


@reports_group.command('chart')
@click.argument('period', type=click.Choice(REPORT_PERIODS))
@click.pass_context
def reports_chart(ctx, period):
    async def action(client):
        return await client.reports.sales_chart(period)

    for label, value in _run(ctx, action, require_auth=True).points():
        click.echo(f"{label}  {_money(value)}")


@cli.command('dashboard')
@click.pass_context
def dashboard(ctx):
    """Headline numbers for the admin dashboard."""
    async def action(client):
        orders = await client.orders.list()
        menu_items = await client.menu.list()
        return dashboard_summary(orders, menu_items)

    summary = _run(ctx, action, require_auth=True)
    click.echo(f"Total orders: {summary.total_orders}")
    click.echo(f"Pending orders: {summary.pending_orders}")
    click.echo(f"Revenue: {_money(summary.total_revenue)}")
    click.echo(f"Menu items: {summary.total_products}")


def main():
    logging.basicConfig(
        level=getattr(logging, str(Config.LOG_LEVEL).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cli(obj={})
