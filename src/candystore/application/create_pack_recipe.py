"""Application service: Create Pack Recipe use case (admin).

Flavors are given by name or alias and resolved against the catalog; the
PackRecipe factory then enforces the sum-to-3 composition rule.
"""

from __future__ import annotations

from candystore.application.dto import RecipeDTO, RecipeItemSpec, pack_items
from candystore.domain.exceptions import FlavorNotFoundError
from candystore.domain.model.pack_recipe import PackRecipe, RecipeItem
from candystore.domain.repository.flavor_repository import FlavorRepository
from candystore.domain.repository.unit_of_work import UnitOfWork
from candystore.domain.service.logging_utils import get_service_logger, log_operation
from candystore.domain.service.sku import generate_sku

logger = get_service_logger(__name__)


def resolve_items(flavors: FlavorRepository, specs: list[RecipeItemSpec]) -> list[RecipeItem]:
    """Map flavor names/aliases to RecipeItems, failing on the first unknown one."""
    items: list[RecipeItem] = []
    for spec in specs:
        flavor = flavors.get_by_name(spec.flavor_name)
        if flavor is None:
            raise FlavorNotFoundError(f"Flavor not found: '{spec.flavor_name}'")
        items.append(RecipeItem(flavor.id, flavor.name, spec.quantity))  # type: ignore[arg-type]
    return items


def recipe_dto(recipe: PackRecipe) -> RecipeDTO:
    return RecipeDTO(
        id=recipe.id,  # type: ignore[arg-type]
        title=recipe.title,
        kind=recipe.kind,
        active=recipe.active,
        sku=generate_sku(recipe.kind, recipe.items),
        items=pack_items(recipe),
    )


class CreatePackRecipeHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        title: str,
        kind: str,
        items: list[RecipeItemSpec],
        active: bool = True,
    ) -> RecipeDTO:
        with self._uow as uow:
            recipe = PackRecipe.create(
                title=title,
                kind=kind,
                items=resolve_items(uow.flavors, items),
                active=active,
            )
            uow.recipes.add(recipe)
            uow.commit()

        log_operation(
            logger,
            operation="create_pack_recipe",
            outcome="success",
            recipe_id=recipe.id,
            title=recipe.title,
        )
        return recipe_dto(recipe)
