"""Abstract Unit of Work: one transaction spanning every repository.

Every cart mutation touches several inventory rows plus the cart line
itself. Handlers run all of it inside a single ``with uow:`` block so that
a failure at any step rolls the whole operation back::

    with self._uow as uow:
        ...
        uow.commit()

Leaving the block without ``commit()`` (or by an exception) rolls back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from candystore.domain.repository.cart_repository import CartRepository
from candystore.domain.repository.flavor_repository import FlavorRepository
from candystore.domain.repository.inventory_repository import InventoryRepository
from candystore.domain.repository.order_repository import OrderRepository
from candystore.domain.repository.pack_recipe_repository import PackRecipeRepository


class UnitOfWork(ABC):

    flavors: FlavorRepository
    inventory: InventoryRepository
    recipes: PackRecipeRepository
    carts: CartRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change since the block was entered permanent."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted changes. Safe to call after commit."""
