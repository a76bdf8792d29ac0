"""Application service: Delete Pack Recipe use case (admin)."""

from __future__ import annotations

from candystore.domain.exceptions import InvalidRecipeError, RecipeInUseError
from candystore.domain.repository.unit_of_work import UnitOfWork


class DeletePackRecipeHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, recipe_id: int) -> None:
        with self._uow as uow:
            if uow.recipes.get_by_id(recipe_id) is None:
                raise InvalidRecipeError("Pack recipe not found")
            if uow.carts.recipe_in_use(recipe_id):
                raise RecipeInUseError("Cannot delete a recipe that is in a cart")
            uow.recipes.delete(recipe_id)
            uow.commit()
