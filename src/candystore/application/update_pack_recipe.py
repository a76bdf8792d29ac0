"""Application service: Update Pack Recipe use case (admin)."""

from __future__ import annotations

from candystore.application.create_pack_recipe import recipe_dto, resolve_items
from candystore.application.dto import RecipeDTO, RecipeItemSpec
from candystore.domain.exceptions import InvalidRecipeError, RecipeInUseError, ValidationError
from candystore.domain.repository.unit_of_work import UnitOfWork


class UpdatePackRecipeHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        recipe_id: int,
        title: str | None = None,
        kind: str | None = None,
        active: bool | None = None,
        items: list[RecipeItemSpec] | None = None,
    ) -> RecipeDTO:
        """Change only the fields that were given.

        Replacing the items of a recipe that open cart lines still hold is
        refused: their reservations were computed from the old mix.
        """
        with self._uow as uow:
            recipe = uow.recipes.get_by_id(recipe_id)
            if recipe is None:
                raise InvalidRecipeError("Pack recipe not found")

            if title is not None:
                if not title.strip():
                    raise ValidationError("Recipe title is required")
                recipe.title = title.strip()
            if kind is not None:
                if not kind.strip():
                    raise ValidationError("Recipe kind is required")
                recipe.kind = kind.strip()
            if active is not None:
                recipe.active = bool(active)
            if items is not None:
                if uow.carts.recipe_in_use(recipe_id):
                    raise RecipeInUseError(
                        "Cannot change the flavors of a recipe that is in a cart"
                    )
                recipe.replace_items(resolve_items(uow.flavors, items))

            uow.recipes.save(recipe)
            uow.commit()
        return recipe_dto(recipe)
