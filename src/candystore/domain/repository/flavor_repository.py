"""Abstract repository for the Flavor aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. The SQLAlchemy implementation lives in the
infrastructure layer; tests use in-memory fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from candystore.domain.model.flavor import Flavor


class FlavorRepository(ABC):

    @abstractmethod
    def get_by_id(self, flavor_id: int) -> Flavor | None:
        """Return a flavor by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Flavor | None:
        """Return the flavor whose name or alias matches, case-insensitively."""

    @abstractmethod
    def list_all(self) -> list[Flavor]:
        """Return every flavor ordered by name."""

    @abstractmethod
    def add(self, flavor: Flavor) -> None:
        """Persist a new flavor and assign its ID."""

    @abstractmethod
    def save(self, flavor: Flavor) -> None:
        """Persist changes to an existing flavor."""

    @abstractmethod
    def delete(self, flavor_id: int) -> None:
        """Remove a flavor."""

    @abstractmethod
    def is_referenced(self, flavor_id: int) -> bool:
        """True if any pack recipe item uses the flavor."""
