"""Application service: List Flavors use case (query)."""

from __future__ import annotations

from candystore.application.dto import FlavorDTO, inventory_line_dto
from candystore.domain.repository.unit_of_work import UnitOfWork


class ListFlavorsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[FlavorDTO]:
        with self._uow as uow:
            result = []
            for flavor in uow.flavors.list_all():
                record = uow.inventory.get_by_flavor_id(flavor.id)  # type: ignore[arg-type]
                result.append(
                    FlavorDTO(
                        id=flavor.id,  # type: ignore[arg-type]
                        name=flavor.name,
                        aliases=sorted(flavor.aliases),
                        active=flavor.active,
                        inventory=inventory_line_dto(record) if record else None,
                    )
                )
            return result
