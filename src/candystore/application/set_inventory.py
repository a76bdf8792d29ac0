"""Application service: Set Inventory use cases (admin).

Covers absolute level updates (single and bulk) and relative restocks.
``reserved`` is never set directly: only cart operations move it.
"""

from __future__ import annotations

from candystore.application.dto import (
    InventoryLineDTO,
    LevelUpdateResultDTO,
    LevelUpdateSpec,
    inventory_line_dto,
)
from candystore.domain.exceptions import DomainException, FlavorNotFoundError
from candystore.domain.repository.unit_of_work import UnitOfWork
from candystore.domain.service.inventory_ledger import InventoryLedger


class SetInventoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        flavor_name: str,
        on_hand: int | None = None,
        safety_stock: int | None = None,
    ) -> InventoryLineDTO:
        """Set the on-hand and/or safety stock of a flavor, by name or alias."""
        with self._uow as uow:
            flavor = uow.flavors.get_by_name(flavor_name)
            if flavor is None:
                raise FlavorNotFoundError(f"Flavor not found: '{flavor_name}'")
            record = InventoryLedger(uow.inventory).set_levels(
                flavor.id, on_hand=on_hand, safety_stock=safety_stock  # type: ignore[arg-type]
            )
            uow.commit()
        return inventory_line_dto(record)

    def handle_bulk(self, updates: list[LevelUpdateSpec]) -> list[LevelUpdateResultDTO]:
        """Apply each update in its own transaction; failures do not stop the rest."""
        results: list[LevelUpdateResultDTO] = []
        for spec in updates:
            if spec.flavor_id is None:
                results.append(
                    LevelUpdateResultDTO(None, False, error="flavor_id is required")
                )
                continue
            try:
                with self._uow as uow:
                    record = InventoryLedger(uow.inventory).set_levels(
                        spec.flavor_id,
                        on_hand=spec.on_hand,
                        safety_stock=spec.safety_stock,
                    )
                    uow.commit()
            except DomainException as exc:
                results.append(LevelUpdateResultDTO(spec.flavor_id, False, error=str(exc)))
                continue
            results.append(
                LevelUpdateResultDTO(spec.flavor_id, True, inventory=inventory_line_dto(record))
            )
        return results


class RestockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, flavor_name: str, delta: int) -> InventoryLineDTO:
        """Add (or with a negative delta, write off) physical units."""
        with self._uow as uow:
            flavor = uow.flavors.get_by_name(flavor_name)
            if flavor is None:
                raise FlavorNotFoundError(f"Flavor not found: '{flavor_name}'")
            record = InventoryLedger(uow.inventory).adjust_on_hand(flavor.id, delta)  # type: ignore[arg-type]
            uow.commit()
        return inventory_line_dto(record)
