"""Order payload model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator

DEFAULT_STATUS = "pending"
ORDER_ID_PREFIX = "ord-"


class Order(BaseModel):
    """A store order as submitted by the storefront.

    Only the fields the service reads or assigns are declared. Everything
    else the caller sends is kept in ``model_extra`` and written back to
    the store document unchanged. Declared fields accept any JSON value
    because the service only tests them for truthiness.
    """

    model_config = ConfigDict(extra="allow")

    full_name: Any = Field(default=None, alias="fullName")
    phone: Any = None
    id: Any = None
    status: Any = None

    # Keys in the order the caller sent them
    _key_order: list[str] = PrivateAttr(default_factory=list)

    @model_validator(mode="wrap")
    @classmethod
    def _remember_key_order(cls, data: Any, handler: Any) -> "Order":
        order = handler(data)
        if isinstance(data, dict):
            order._key_order = list(data)
        return order

    @property
    def has_contact(self) -> bool:
        """True when either a full name or a phone number is present."""
        return bool(self.full_name) or bool(self.phone)

    def to_document(self) -> dict[str, Any]:
        """Serialize for the store document.

        Emits exactly the keys the caller sent, in the caller's order,
        followed by any the service assigned (``id`` before ``status``).
        """
        values = self.model_dump(
            by_alias=True,
            exclude_unset=True,
            include=set(type(self).model_fields),
        )
        values.update(self.model_extra or {})

        document = {key: values.pop(key) for key in self._key_order if key in values}
        document.update(values)
        return document
