"""CartLine: a shopper's claim on 3-pack stock.

A cart line holds ``recipe item quantity x line quantity`` units of every
flavor in its recipe for as long as it exists. Lines are created on
add-to-cart, resized on update and destroyed on removal, cart clear or
checkout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from candystore.domain.model.value_objects import Money

THREE_PACK_PRODUCT_ID = "3-pack"
THREE_PACK_UNIT_PRICE = Money.of("27.00")


@dataclass(frozen=True)
class UserIdentity:
    """Authenticated caller, as supplied by the auth collaborator."""

    id: str
    role: str = "customer"


@dataclass
class CartLine:

    id: int | None
    user_id: str
    recipe_id: int
    quantity: int
    sku: str
    product_id: str = THREE_PACK_PRODUCT_ID
    unit_price: Money = THREE_PACK_UNIT_PRICE
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity

    def belongs_to(self, user: UserIdentity) -> bool:
        return self.user_id == user.id
