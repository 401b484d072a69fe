"""HTTP API routers."""

from orders_api.api.health import router as health_router
from orders_api.api.orders import method_not_allowed_handler
from orders_api.api.orders import router as orders_router

__all__ = [
    "health_router",
    "method_not_allowed_handler",
    "orders_router",
]
