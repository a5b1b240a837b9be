from .auth_service import AuthService
from .menu_service import MenuService
from .orders_service import OrdersService, ensure_order_totals
from .inventory_service import RawProductsService, PurchasesService
from .reporting_service import SalesService, ReportsService

__all__ = [
    'AuthService', 'MenuService', 'OrdersService', 'ensure_order_totals',
    'RawProductsService', 'PurchasesService', 'SalesService', 'ReportsService',
]
