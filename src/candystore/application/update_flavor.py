"""Application service: Update Flavor use case (admin)."""

from __future__ import annotations

from candystore.application.dto import FlavorDTO
from candystore.domain.exceptions import FlavorNotFoundError, ValidationError
from candystore.domain.repository.unit_of_work import UnitOfWork


class UpdateFlavorHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        flavor_id: int,
        name: str | None = None,
        aliases: list[str] | None = None,
        active: bool | None = None,
    ) -> FlavorDTO:
        """Change only the fields that were given.

        Renaming does NOT rewrite SKUs of lines already in carts; they
        captured their SKU when they were added.
        """
        with self._uow as uow:
            flavor = uow.flavors.get_by_id(flavor_id)
            if flavor is None:
                raise FlavorNotFoundError(f"Flavor with ID {flavor_id} not found")

            if name is not None:
                clash = uow.flavors.get_by_name(name)
                if clash is not None and clash.id != flavor.id:
                    raise ValidationError("Flavor with this name already exists")
                flavor.rename(name)
            if aliases is not None:
                flavor.set_aliases(aliases)
                for alias in flavor.aliases:
                    owner = uow.flavors.get_by_name(alias)
                    if owner is not None and owner.id != flavor.id:
                        raise ValidationError(
                            f"Alias '{alias}' is already used by another flavor"
                        )
            if active is not None:
                flavor.active = bool(active)

            uow.flavors.save(flavor)
            uow.commit()

        return FlavorDTO(
            id=flavor.id,  # type: ignore[arg-type]
            name=flavor.name,
            aliases=sorted(flavor.aliases),
            active=flavor.active,
        )
