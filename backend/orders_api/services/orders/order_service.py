"""Order intake service.

Turns a raw request body into a normalized order and records it in the
store document with a single read-modify-write against the contents API.
The write is conditional on the version token from the read; a concurrent
writer makes it fail and nothing is retried.
"""

import json
from typing import Any

import structlog

from orders_api.models.order import DEFAULT_STATUS, ORDER_ID_PREFIX, Order
from orders_api.models.store import reject_constant
from orders_api.services.exceptions import ParseError, ValidationError
from orders_api.services.external.github import GitHubContentsService
from orders_api.utils.datetime_utils import Clock, epoch_millis

logger = structlog.get_logger(__name__)


def parse_order(body: bytes | str | dict[str, Any] | None) -> Order:
    """Parse a request body into an order.

    Accepts an already-decoded object, raw JSON, or a JSON-encoded string
    containing the JSON object. An empty body and any value that is not an
    object yield an empty order.

    Raises:
        ParseError: If the body is not valid JSON, including NaN or Infinity
    """
    data: Any = body
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError("Request body is not valid UTF-8") from e

    if isinstance(data, str):
        try:
            data = json.loads(data or "{}", parse_constant=reject_constant)
            # The storefront may send the order as a JSON-encoded string
            if isinstance(data, str):
                data = json.loads(data or "{}", parse_constant=reject_constant)
        except ValueError as e:
            raise ParseError(f"Invalid JSON body: {e}") from e

    if not isinstance(data, dict):
        data = {}

    return Order.model_validate(data)


def validate_order(order: Order) -> None:
    """Require a full name or a phone number.

    Raises:
        ValidationError: If both are missing or empty
    """
    if not order.has_contact:
        raise ValidationError("Order must include fullName and phone")


def normalize_order(order: Order, clock: Clock = epoch_millis) -> Order:
    """Assign ``id`` and ``status`` when the caller left them empty."""
    if not order.id:
        order.id = f"{ORDER_ID_PREFIX}{clock()}"
    if not order.status:
        order.status = DEFAULT_STATUS
    return order


class OrderService:
    """Records orders in the store document."""

    def __init__(self, store: GitHubContentsService, clock: Clock = epoch_millis):
        self.store = store
        self.clock = clock

    async def append_order(self, order: Order) -> Any:
        """Prepend the order to the store document and write it back.

        Returns:
            The id of the recorded order

        Raises:
            FetchError: If the document could not be read or decoded
            WriteError: If the write was rejected, e.g. on a stale version token
        """
        document = await self.store.get_document()
        document.prepend_order(order.to_document())

        commit_sha = await self.store.put_document(document, message=f"Add order {order.id}")

        logger.info(
            "Saved order",
            order_id=order.id,
            path=self.store.config.path,
            order_count=len(document.orders),
            commit_sha=commit_sha,
        )
        return order.id

    async def submit(self, body: bytes | str | dict[str, Any] | None) -> Any:
        """Parse, validate, normalize and record an order in one call."""
        order = parse_order(body)
        validate_order(order)
        normalize_order(order, self.clock)
        return await self.append_order(order)
