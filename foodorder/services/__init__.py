"""
                        Services Module

Persistence and export services used by the route handlers.

Services:
    - users: credential store (signup, login, admin seeding)
    - menu: menu item CRUD
    - orders: order CRUD
    - excel_manager: file-locked Excel export of orders
"""

from foodorder.services.excel_manager import ExcelManager
from foodorder.services.menu import MenuStore
from foodorder.services.orders import OrderStore
from foodorder.services.users import UserStore

__all__ = ["ExcelManager", "MenuStore", "OrderStore", "UserStore"]
