"""Domain service: 3-pack reservation.

Translates "N packs of recipe R" into per-flavor stock requirements and
hands them to the InventoryLedger. Every cart handler goes through here,
so the recipe checks and the units arithmetic exist exactly once.
"""

from __future__ import annotations

from candystore.domain.exceptions import (
    InvalidCompositionError,
    InvalidRecipeError,
    RecipeInactiveError,
)
from candystore.domain.model.pack_recipe import PACK_SIZE, PackRecipe
from candystore.domain.repository.pack_recipe_repository import PackRecipeRepository
from candystore.domain.service.inventory_ledger import InventoryLedger


class PackReservationService:

    def __init__(self, recipe_repo: PackRecipeRepository, ledger: InventoryLedger) -> None:
        self._recipe_repo = recipe_repo
        self._ledger = ledger

    def load_recipe(self, recipe_id: int) -> PackRecipe:
        recipe = self._recipe_repo.get_by_id(recipe_id)
        if recipe is None:
            raise InvalidRecipeError("Pack recipe not found")
        return recipe

    def load_purchasable_recipe(self, recipe_id: int) -> PackRecipe:
        """Load a recipe and check it may be sold right now.

        The composition is re-checked here because stored recipes are
        reconstituted without validation.
        """
        recipe = self.load_recipe(recipe_id)
        if not recipe.active:
            raise RecipeInactiveError("Pack recipe is not active")
        if not recipe.is_valid_composition:
            raise InvalidCompositionError(
                f"Invalid recipe: total items is {recipe.total_units}, must be {PACK_SIZE}"
            )
        return recipe

    def reserve_packs(self, recipe: PackRecipe, packs: int) -> None:
        """Reserve stock for *packs* more packs; all flavors or none."""
        self._ledger.reserve_all(recipe.requirements(packs))

    def release_packs(self, recipe: PackRecipe, packs: int) -> None:
        self._ledger.release_all(recipe.requirements(packs))

    def consume_packs(self, recipe: PackRecipe, packs: int) -> None:
        self._ledger.consume_all(recipe.requirements(packs))
