"""Application service: Remove 3-pack cart line use case."""

from __future__ import annotations

from candystore.domain.exceptions import CartLineNotFoundError
from candystore.domain.model.cart import UserIdentity
from candystore.domain.repository.unit_of_work import UnitOfWork
from candystore.domain.service.inventory_ledger import InventoryLedger
from candystore.domain.service.logging_utils import get_service_logger, log_operation
from candystore.domain.service.pack_reservation_service import PackReservationService

logger = get_service_logger(__name__)


class RemoveCartLineHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user: UserIdentity, line_id: int) -> None:
        """Release every flavor the line holds, then delete it."""
        with self._uow as uow:
            line = uow.carts.get_by_id(line_id)
            if line is None or not line.belongs_to(user):
                raise CartLineNotFoundError("Cart line not found")

            reservations = PackReservationService(uow.recipes, InventoryLedger(uow.inventory))
            recipe = reservations.load_recipe(line.recipe_id)
            reservations.release_packs(recipe, line.quantity)

            uow.carts.delete(line.id)  # type: ignore[arg-type]
            uow.commit()

        log_operation(
            logger,
            operation="remove_cart_line",
            outcome="success",
            user_id=user.id,
            line_id=line_id,
            packs_released=line.quantity,
        )
