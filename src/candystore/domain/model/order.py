"""Order aggregate: the permanent record of a checked-out cart.

The Order is an aggregate root that owns its line items. It is only ever
created from committed 3-pack cart lines; payment settlement happens
elsewhere.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from candystore.domain.exceptions import ValidationError
from candystore.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "PENDING"


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the pack, SKU and price of a cart line at checkout time."""

    recipe_id: int
    recipe_title: str
    sku: str
    quantity: Quantity
    unit_price: Money  # locked at checkout

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for purchases.

    Use the ``Order.create()`` factory for new orders.  The ``__init__``
    is intentionally simple so the repository can reconstitute persisted
    orders without re-validating.
    """

    id: int | None
    user_id: str
    items: list[OrderLineItem]
    status: OrderStatus = OrderStatus.PENDING
    shipping_address: str | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        user_id: str,
        items: list[OrderLineItem],
        shipping_address: str | None = None,
        notes: str | None = None,
    ) -> Order:
        if not user_id:
            raise ValidationError("Order must belong to a user")
        if not items:
            raise ValidationError("Cart is empty")
        return Order(
            id=None,
            user_id=user_id,
            items=list(items),
            shipping_address=shipping_address,
            notes=notes,
        )

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result
