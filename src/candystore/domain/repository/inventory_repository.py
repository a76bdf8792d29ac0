"""Abstract repository for the InventoryRecord aggregate.

Besides plain load/save, the repository exposes the row-level primitives
the ledger needs to stay correct under concurrent shoppers: locking a set
of rows for the rest of the transaction, and conditional counter updates
that the store evaluates atomically.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from candystore.domain.model.inventory import InventoryRecord


class InventoryRepository(ABC):

    @abstractmethod
    def get_by_flavor_id(self, flavor_id: int) -> InventoryRecord | None:
        """Return the inventory record for a flavor, or None."""

    @abstractmethod
    def list_all(self) -> list[InventoryRecord]:
        """Return every inventory record ordered by flavor name."""

    @abstractmethod
    def lock(self, flavor_ids: list[int]) -> dict[int, InventoryRecord]:
        """Load and lock the given rows until the transaction ends.

        Rows are locked in ascending flavor ID order. Missing rows are
        simply absent from the result.
        """

    @abstractmethod
    def add(self, record: InventoryRecord) -> None:
        """Persist a new inventory record."""

    @abstractmethod
    def save(self, record: InventoryRecord) -> None:
        """Persist on_hand and safety_stock of an existing record."""

    @abstractmethod
    def delete(self, flavor_id: int) -> None:
        """Remove the inventory record of a flavor."""

    @abstractmethod
    def increment_reserved(self, flavor_id: int, units: int) -> bool:
        """Add *units* to ``reserved`` only if they fit after safety stock.

        Returns False, changing nothing, when the sellable quantity is
        smaller than *units*.
        """

    @abstractmethod
    def decrement_reserved(self, flavor_id: int, units: int) -> None:
        """Subtract *units* from ``reserved``, flooring the result at zero."""

    @abstractmethod
    def consume(self, flavor_id: int, units: int) -> bool:
        """Remove *units* from both ``on_hand`` and ``reserved`` (checkout).

        ``reserved`` is floored at zero. Returns False, changing nothing,
        when ``on_hand`` is smaller than *units*.
        """
