"""Application service: Add 3-pack to cart use case.

Orchestrates the recipe checks, the all-or-nothing flavor reservation and
the cart line upsert inside one unit of work. If the user already has a
line for the same recipe the quantities are merged instead of creating a
second line.
"""

from __future__ import annotations

from candystore.application.dto import CartLineDTO, cart_line_dto
from candystore.domain.exceptions import DuplicateCartLineError, ValidationError
from candystore.domain.model.cart import (
    THREE_PACK_PRODUCT_ID,
    THREE_PACK_UNIT_PRICE,
    CartLine,
    UserIdentity,
)
from candystore.domain.model.value_objects import Quantity
from candystore.domain.repository.unit_of_work import UnitOfWork
from candystore.domain.service.inventory_ledger import InventoryLedger
from candystore.domain.service.logging_utils import get_service_logger, log_operation
from candystore.domain.service.pack_reservation_service import PackReservationService
from candystore.domain.service.sku import generate_sku

logger = get_service_logger(__name__)

# A lost unique-constraint race is retried once; the retry sees the
# competing line and merges into it.
MAX_ATTEMPTS = 2


class AddToCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        user: UserIdentity,
        product_id: str | None,
        recipe_id: int | None,
        qty: object,
    ) -> CartLineDTO:
        if not product_id or not recipe_id or qty in (None, ""):
            raise ValidationError(
                "Missing required fields: product_id, recipe_id, and qty are required"
            )
        if product_id != THREE_PACK_PRODUCT_ID:
            raise ValidationError("Only 3-pack products are supported")
        packs = Quantity.parse(qty).value

        attempt = 1
        while True:
            try:
                return self._add(user, recipe_id, packs)
            except DuplicateCartLineError:
                if attempt >= MAX_ATTEMPTS:
                    raise
                attempt += 1
                log_operation(
                    logger,
                    operation="add_to_cart",
                    outcome="duplicate_line_retry",
                    user_id=user.id,
                    recipe_id=recipe_id,
                )

    def _add(self, user: UserIdentity, recipe_id: int, packs: int) -> CartLineDTO:
        with self._uow as uow:
            reservations = PackReservationService(uow.recipes, InventoryLedger(uow.inventory))
            recipe = reservations.load_purchasable_recipe(recipe_id)

            # All flavors or none; raises before the cart is touched
            reservations.reserve_packs(recipe, packs)

            sku = generate_sku(recipe.kind, recipe.items)
            line = uow.carts.find_line(user.id, THREE_PACK_PRODUCT_ID, recipe_id)
            if line is not None:
                line.quantity += packs
                line.unit_price = THREE_PACK_UNIT_PRICE
                line.sku = sku
                uow.carts.save(line)
            else:
                line = CartLine(
                    id=None,
                    user_id=user.id,
                    recipe_id=recipe_id,
                    quantity=packs,
                    sku=sku,
                )
                uow.carts.add(line)

            uow.commit()

        log_operation(
            logger,
            operation="add_to_cart",
            outcome="success",
            user_id=user.id,
            recipe_id=recipe_id,
            packs=packs,
            line_id=line.id,
            line_quantity=line.quantity,
        )
        return cart_line_dto(line, recipe)
