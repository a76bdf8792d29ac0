"""Application service: Clear 3-pack cart use case.

Releases the reservations of every line the user owns and deletes the
lines. A line whose stock cannot be released (its recipe or an inventory
row vanished) is a bookkeeping defect: it is logged and counted, and the
rest of the cart is still cleared.
"""

from __future__ import annotations

import logging

from candystore.application.dto import ClearCartResultDTO
from candystore.domain.exceptions import DomainException
from candystore.domain.model.cart import UserIdentity
from candystore.domain.repository.unit_of_work import UnitOfWork
from candystore.domain.service.inventory_ledger import InventoryLedger
from candystore.domain.service.logging_utils import get_service_logger, log_operation

logger = get_service_logger(__name__)


class ClearCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user: UserIdentity) -> ClearCartResultDTO:
        failures = 0
        with self._uow as uow:
            ledger = InventoryLedger(uow.inventory)

            for line in uow.carts.list_for_user(user.id):
                recipe = uow.recipes.get_by_id(line.recipe_id)
                if recipe is None:
                    failures += 1
                    log_operation(
                        logger,
                        operation="clear_cart",
                        outcome="release_failed",
                        level=logging.ERROR,
                        user_id=user.id,
                        line_id=line.id,
                        error=f"recipe {line.recipe_id} not found",
                    )
                    continue
                # Release flavor by flavor so one bad row cannot block the rest
                for req in recipe.requirements(line.quantity):
                    try:
                        ledger.release(req.flavor_id, req.units)
                    except DomainException as exc:
                        failures += 1
                        log_operation(
                            logger,
                            operation="clear_cart",
                            outcome="release_failed",
                            level=logging.ERROR,
                            user_id=user.id,
                            line_id=line.id,
                            flavor_id=req.flavor_id,
                            units=req.units,
                            error=str(exc),
                        )

            removed = uow.carts.delete_for_user(user.id)
            uow.commit()

        log_operation(
            logger,
            operation="clear_cart",
            outcome="success",
            user_id=user.id,
            lines_removed=removed,
            release_failures=failures,
        )
        return ClearCartResultDTO(lines_removed=removed, release_failures=failures)
