"""HTTP routers, mounted at the application root by ``create_app``."""

from foodorder.routes import admin, auth, menu, orders

ROUTERS = [auth.router, orders.router, menu.router, admin.router]

__all__ = ["ROUTERS"]
