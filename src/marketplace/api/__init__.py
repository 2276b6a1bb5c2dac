"""Marketplace API package."""

from marketplace.api.errors import register_error_handlers
from marketplace.api.routes import auth_router, cart_router, order_router, product_router, user_router

ROUTERS = [auth_router, user_router, product_router, cart_router, order_router]

__all__ = [
    "ROUTERS",
    "auth_router",
    "cart_router",
    "order_router",
    "product_router",
    "register_error_handlers",
    "user_router",
]
