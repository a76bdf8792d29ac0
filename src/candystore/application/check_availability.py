"""Application service: Check 3-pack availability use case (query).

Answers "can recipe R be bought Q times right now?" without touching
stock. It uses the same ``available_after_safety`` arithmetic as the
ledger, so with no concurrent shoppers a purchasable answer is never
followed by a reservation rejection.
"""

from __future__ import annotations

from candystore.application.dto import (
    AvailabilityDTO,
    FlavorAvailabilityDTO,
    LimitingFactorDTO,
)
from candystore.domain.exceptions import InvalidRecipeError, ValidationError
from candystore.domain.model.value_objects import Quantity
from candystore.domain.repository.unit_of_work import UnitOfWork


class CheckAvailabilityHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, recipe_id: int | None, qty: object = 1) -> AvailabilityDTO:
        if not recipe_id:
            raise ValidationError("recipe_id is required")
        packs = Quantity.parse(qty).value

        with self._uow as uow:
            recipe = uow.recipes.get_by_id(recipe_id)
            if recipe is None:
                raise InvalidRecipeError("Pack recipe not found")

            details: list[FlavorAvailabilityDTO] = []
            for req in recipe.requirements(packs):
                record = uow.inventory.get_by_flavor_id(req.flavor_id)
                if record is None:
                    # No stock row means nothing can be sold
                    details.append(
                        FlavorAvailabilityDTO(
                            flavor_id=req.flavor_id,
                            flavor_name=req.flavor_name,
                            required=req.units,
                            available=0,
                            on_hand=0,
                            reserved=0,
                            safety_stock=0,
                            available_after_safety=0,
                        )
                    )
                    continue
                details.append(
                    FlavorAvailabilityDTO(
                        flavor_id=req.flavor_id,
                        flavor_name=req.flavor_name,
                        required=req.units,
                        available=record.available,
                        on_hand=record.on_hand,
                        reserved=record.reserved,
                        safety_stock=record.safety_stock,
                        available_after_safety=record.available_after_safety,
                    )
                )

        limiting = next(
            (d for d in details if d.available_after_safety < d.required), None
        )
        return AvailabilityDTO(
            recipe_id=recipe_id,
            requested_qty=packs,
            is_purchasable=limiting is None,
            limiting_factor=(
                LimitingFactorDTO(
                    flavor_name=limiting.flavor_name,
                    available=limiting.available_after_safety,
                    required=limiting.required,
                )
                if limiting
                else None
            ),
            availability=details,
        )
