"""Application service: Update 3-pack cart line quantity use case.

Only the difference between the old and new quantity touches stock:
growing a line reserves the extra packs (all flavors or none), shrinking
it releases the surplus. The new quantity is persisted after the stock
adjustment succeeded, in the same transaction.
"""

from __future__ import annotations

from candystore.application.dto import CartLineDTO, cart_line_dto
from candystore.domain.exceptions import CartLineNotFoundError
from candystore.domain.model.cart import UserIdentity
from candystore.domain.model.value_objects import Quantity
from candystore.domain.repository.unit_of_work import UnitOfWork
from candystore.domain.service.inventory_ledger import InventoryLedger
from candystore.domain.service.logging_utils import get_service_logger, log_operation
from candystore.domain.service.pack_reservation_service import PackReservationService

logger = get_service_logger(__name__)


class UpdateCartLineHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user: UserIdentity, line_id: int, qty: object) -> CartLineDTO:
        """Set a line to *qty* packs. Use RemoveCartLineHandler to drop it."""
        new_qty = Quantity.parse(qty).value

        with self._uow as uow:
            line = uow.carts.get_by_id(line_id)
            if line is None or not line.belongs_to(user):
                raise CartLineNotFoundError("Cart line not found")

            reservations = PackReservationService(uow.recipes, InventoryLedger(uow.inventory))
            recipe = reservations.load_recipe(line.recipe_id)

            delta = new_qty - line.quantity
            if delta > 0:
                reservations.reserve_packs(recipe, delta)
            elif delta < 0:
                reservations.release_packs(recipe, -delta)

            line.quantity = new_qty
            uow.carts.save(line)
            uow.commit()

        log_operation(
            logger,
            operation="update_cart_line",
            outcome="success",
            user_id=user.id,
            line_id=line_id,
            delta=delta,
            line_quantity=new_qty,
        )
        return cart_line_dto(line, recipe)
