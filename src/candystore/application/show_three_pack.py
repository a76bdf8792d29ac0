"""Application service: Show 3-pack product use case (query).

The 3-pack is a single catalog product whose variants are the active
pack recipes.
"""

from __future__ import annotations

from candystore.application.create_pack_recipe import recipe_dto
from candystore.application.dto import RecipeDTO, ThreePackProductDTO
from candystore.domain.exceptions import InvalidRecipeError
from candystore.domain.model.cart import THREE_PACK_PRODUCT_ID, THREE_PACK_UNIT_PRICE
from candystore.domain.repository.unit_of_work import UnitOfWork

THREE_PACK_TITLE = "Candy 3-Pack"


class ShowThreePackHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> ThreePackProductDTO:
        with self._uow as uow:
            variants = [recipe_dto(r) for r in uow.recipes.list_all(active_only=True)]
        return ThreePackProductDTO(
            id=THREE_PACK_PRODUCT_ID,
            title=THREE_PACK_TITLE,
            price=THREE_PACK_UNIT_PRICE.amount,
            currency=THREE_PACK_UNIT_PRICE.currency,
            variants=variants,
        )

    def list_recipes(self) -> list[RecipeDTO]:
        """Every recipe, inactive ones included (admin view)."""
        with self._uow as uow:
            return [recipe_dto(r) for r in uow.recipes.list_all()]

    def show_recipe(self, recipe_id: int) -> RecipeDTO:
        with self._uow as uow:
            recipe = uow.recipes.get_by_id(recipe_id)
            if recipe is None:
                raise InvalidRecipeError("Pack recipe not found")
            return recipe_dto(recipe)
