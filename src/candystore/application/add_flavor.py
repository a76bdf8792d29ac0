"""Application service: Add Flavor use case (admin)."""

from __future__ import annotations

from candystore.application.dto import FlavorDTO, inventory_line_dto
from candystore.domain.exceptions import ValidationError
from candystore.domain.model.flavor import Flavor
from candystore.domain.model.inventory import InventoryRecord
from candystore.domain.repository.unit_of_work import UnitOfWork
from candystore.domain.service.logging_utils import get_service_logger, log_operation

logger = get_service_logger(__name__)


class AddFlavorHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        name: str,
        aliases: list[str] | None = None,
        active: bool = True,
        on_hand: int = 0,
        safety_stock: int = 0,
    ) -> FlavorDTO:
        """Add a flavor together with its (initially empty) inventory record."""
        flavor = Flavor.create(name, aliases, active)

        with self._uow as uow:
            if uow.flavors.get_by_name(flavor.name) is not None:
                raise ValidationError("Flavor with this name already exists")
            for alias in flavor.aliases:
                if uow.flavors.get_by_name(alias) is not None:
                    raise ValidationError(f"Alias '{alias}' is already used by another flavor")

            uow.flavors.add(flavor)
            record = InventoryRecord(flavor_id=flavor.id, flavor_name=flavor.name)  # type: ignore[arg-type]
            record.set_levels(on_hand=on_hand, safety_stock=safety_stock)
            uow.inventory.add(record)
            uow.commit()

        log_operation(
            logger,
            operation="add_flavor",
            outcome="success",
            flavor_id=flavor.id,
            flavor_name=flavor.name,
        )
        return FlavorDTO(
            id=flavor.id,  # type: ignore[arg-type]
            name=flavor.name,
            aliases=sorted(flavor.aliases),
            active=flavor.active,
            inventory=inventory_line_dto(record),
        )
