"""Domain models."""

from orders_api.models.order import DEFAULT_STATUS, ORDER_ID_PREFIX, Order
from orders_api.models.store import ORDERS_KEY, StoreDocument

__all__ = [
    "Order",
    "StoreDocument",
    "DEFAULT_STATUS",
    "ORDER_ID_PREFIX",
    "ORDERS_KEY",
]
