"""Application service: Delete Flavor use case (admin)."""

from __future__ import annotations

from candystore.domain.exceptions import FlavorInUseError, FlavorNotFoundError
from candystore.domain.repository.unit_of_work import UnitOfWork
from candystore.domain.service.logging_utils import get_service_logger, log_operation

logger = get_service_logger(__name__)


class DeleteFlavorHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, flavor_id: int) -> None:
        with self._uow as uow:
            flavor = uow.flavors.get_by_id(flavor_id)
            if flavor is None:
                raise FlavorNotFoundError(f"Flavor with ID {flavor_id} not found")
            if uow.flavors.is_referenced(flavor_id):
                raise FlavorInUseError(
                    "Cannot delete flavor that is used in products or recipes"
                )
            uow.inventory.delete(flavor_id)
            uow.flavors.delete(flavor_id)
            uow.commit()

        log_operation(
            logger,
            operation="delete_flavor",
            outcome="success",
            flavor_id=flavor_id,
            flavor_name=flavor.name,
        )
