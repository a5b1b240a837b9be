from .base import Envelope
from .menu import MenuItem, MenuItemForm, MENU_ITEM_WIRE_FIELDS
from .orders import Order, OrderItem, OrderForm
from .inventory import RawProduct, RawProductForm, Purchase, PurchaseForm, RAW_PRODUCT_WIRE_FIELDS
from .sales import Sale, TopSellingItem, DailySalesReport, MonthlySalesReport, ProfitLossReport, SalesChart
from .auth import Admin, LoginCredentials, AuthResponse

__all__ = [
    'Envelope',
    'MenuItem', 'MenuItemForm', 'MENU_ITEM_WIRE_FIELDS',
    'Order', 'OrderItem', 'OrderForm',
    'RawProduct', 'RawProductForm', 'Purchase', 'PurchaseForm', 'RAW_PRODUCT_WIRE_FIELDS',
    'Sale', 'TopSellingItem', 'DailySalesReport', 'MonthlySalesReport', 'ProfitLossReport', 'SalesChart',
    'Admin', 'LoginCredentials', 'AuthResponse',
]
