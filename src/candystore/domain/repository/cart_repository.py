"""Abstract repository for 3-pack cart lines."""

from __future__ import annotations

from abc import ABC, abstractmethod

from candystore.domain.model.cart import CartLine


class CartRepository(ABC):

    @abstractmethod
    def get_by_id(self, line_id: int) -> CartLine | None:
        """Return a cart line by its ID, or None."""

    @abstractmethod
    def find_line(self, user_id: str, product_id: str, recipe_id: int) -> CartLine | None:
        """Return the user's open line for a product/recipe pair, or None."""

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[CartLine]:
        """Return the user's lines, newest first."""

    @abstractmethod
    def add(self, line: CartLine) -> None:
        """Persist a new line and assign its ID.

        Raises DuplicateCartLineError if the user already has a line for
        the same product and recipe.
        """

    @abstractmethod
    def save(self, line: CartLine) -> None:
        """Persist quantity and SKU changes to an existing line."""

    @abstractmethod
    def delete(self, line_id: int) -> None:
        """Remove a single line."""

    @abstractmethod
    def delete_for_user(self, user_id: str) -> int:
        """Remove all of a user's lines and return how many were removed."""

    @abstractmethod
    def recipe_in_use(self, recipe_id: int) -> bool:
        """True if any open line references the recipe."""
