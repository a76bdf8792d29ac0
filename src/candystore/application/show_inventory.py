"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from candystore.application.dto import InventoryLineDTO, inventory_line_dto
from candystore.domain.repository.unit_of_work import UnitOfWork
from candystore.domain.service.inventory_ledger import InventoryLedger


class ShowInventoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[InventoryLineDTO]:
        with self._uow as uow:
            return [inventory_line_dto(record) for record in uow.inventory.list_all()]

    def handle_one(self, flavor_id: int) -> InventoryLineDTO:
        with self._uow as uow:
            availability = InventoryLedger(uow.inventory).get_availability(flavor_id)
        return InventoryLineDTO(
            flavor_id=availability.flavor_id,
            flavor_name=availability.flavor_name,
            on_hand=availability.on_hand,
            reserved=availability.reserved,
            safety_stock=availability.safety_stock,
            available=availability.available,
            available_after_safety=availability.available_after_safety,
        )
