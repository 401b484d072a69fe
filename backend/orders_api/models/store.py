"""Store document held in the repository."""

import base64
import json
from dataclasses import dataclass
from typing import Any

ORDERS_KEY = "orders"


def reject_constant(name: str) -> Any:
    """Refuse NaN and Infinity, which JSON does not allow."""
    raise ValueError(f"Non-standard JSON constant {name}")


@dataclass
class StoreDocument:
    """Decoded store document plus the version token it was read at.

    ``sha`` is the blob sha returned by the contents API. Writing the
    document back with this sha fails if anyone else committed in between.
    """

    data: dict[str, Any]
    sha: str | None = None

    @classmethod
    def from_content(cls, content: str, sha: str | None) -> "StoreDocument":
        """Decode base64 file content from the contents API.

        Raises:
            ValueError: If the content is not a base64-encoded JSON object
                or contains NaN or Infinity
        """
        text = base64.b64decode(content).decode("utf-8")
        data = json.loads(text, parse_constant=reject_constant)
        if not isinstance(data, dict):
            raise ValueError(f"Store document must be a JSON object, got {type(data).__name__}")
        return cls(data=data, sha=sha)

    @property
    def orders(self) -> list[Any]:
        """The orders list, newest first. Replaces a missing or non-list value."""
        orders = self.data.get(ORDERS_KEY)
        if not isinstance(orders, list):
            orders = []
            self.data[ORDERS_KEY] = orders
        return orders

    def prepend_order(self, order: dict[str, Any]) -> None:
        self.orders.insert(0, order)

    def serialize(self) -> str:
        """Pretty-print the document with 2-space indentation."""
        return json.dumps(self.data, indent=2, ensure_ascii=False, allow_nan=False)

    def encode(self) -> str:
        """Serialize and base64-encode for a contents API write."""
        return base64.b64encode(self.serialize().encode("utf-8")).decode("ascii")
