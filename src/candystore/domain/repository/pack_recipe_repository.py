"""Abstract repository for the PackRecipe aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from candystore.domain.model.pack_recipe import PackRecipe


class PackRecipeRepository(ABC):

    @abstractmethod
    def get_by_id(self, recipe_id: int) -> PackRecipe | None:
        """Return a recipe with its items in stored order, or None."""

    @abstractmethod
    def list_all(self, active_only: bool = False) -> list[PackRecipe]:
        """Return recipes ordered by kind, then title."""

    @abstractmethod
    def add(self, recipe: PackRecipe) -> None:
        """Persist a new recipe and assign its ID."""

    @abstractmethod
    def save(self, recipe: PackRecipe) -> None:
        """Persist changes to an existing recipe, items included."""

    @abstractmethod
    def delete(self, recipe_id: int) -> None:
        """Remove a recipe and its items."""
