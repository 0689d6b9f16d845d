"""Storefront HTTP API package."""

from storefront.api.auth import employee_router, user_router
from storefront.api.feedback import feedback_router
from storefront.api.routes import cart_router, checkout_router, product_router

routers = [
    user_router,
    employee_router,
    product_router,
    cart_router,
    checkout_router,
    feedback_router,
]

__all__ = [
    "cart_router",
    "checkout_router",
    "employee_router",
    "feedback_router",
    "product_router",
    "routers",
    "user_router",
]
