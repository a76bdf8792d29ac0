"""InventoryRecord aggregate: per-flavor stock counters.

Each flavor has exactly one InventoryRecord that knows how many units are
physically on hand, how many are held by open cart lines, and how many are
kept back as safety stock.
"""

from __future__ import annotations

from dataclasses import dataclass

from candystore.domain.exceptions import (
    BusinessRuleViolation,
    InsufficientStockError,
    ValidationError,
)


@dataclass
class InventoryRecord:
    """Aggregate root for flavor stock.

    Invariants:
    - ``0 <= reserved <= on_hand`` after every mutation
    - ``safety_stock`` is never sold, so reservations are checked
      against ``available_after_safety``
    """

    flavor_id: int
    flavor_name: str
    on_hand: int = 0
    reserved: int = 0
    safety_stock: int = 0

    @property
    def available(self) -> int:
        return self.on_hand - self.reserved

    @property
    def available_after_safety(self) -> int:
        return self.available - self.safety_stock

    def can_cover(self, units: int) -> bool:
        return self.available_after_safety >= units

    def reserve(self, units: int) -> None:
        """Hold *units* for an open cart line.

        Raises InsufficientStockError if the sellable quantity is too low.
        Reservations never clamp.
        """
        if units <= 0:
            raise ValidationError("Reservation quantity must be positive")
        if not self.can_cover(units):
            raise InsufficientStockError(
                self.flavor_name, self.available_after_safety, units
            )
        self.reserved += units

    def release(self, units: int) -> int:
        """Give back *units* of reserved stock, floored at zero.

        Returns the part of *units* that was not actually reserved; a
        non-zero result means reservation accounting has drifted.
        """
        if units <= 0:
            raise ValidationError("Release quantity must be positive")
        shortfall = max(0, units - self.reserved)
        self.reserved = max(0, self.reserved - units)
        return shortfall

    def consume(self, units: int) -> int:
        """Turn reserved units into a permanent on-hand decrement (checkout).

        Returns the clamped release shortfall, like ``release()``.
        """
        if units <= 0:
            raise ValidationError("Consume quantity must be positive")
        if units > self.on_hand:
            raise InsufficientStockError(self.flavor_name, self.on_hand, units)
        shortfall = self.release(units)
        self.on_hand -= units
        return shortfall

    def adjust_on_hand(self, delta: int) -> None:
        """Restock (positive) or write off (negative) physical units."""
        new_on_hand = self.on_hand + delta
        self._check_on_hand(new_on_hand)
        self.on_hand = new_on_hand

    def set_levels(self, on_hand: int | None = None, safety_stock: int | None = None) -> None:
        if on_hand is not None:
            if isinstance(on_hand, bool) or not isinstance(on_hand, int) or on_hand < 0:
                raise ValidationError("on_hand must be a non-negative number")
        if safety_stock is not None:
            if (
                isinstance(safety_stock, bool)
                or not isinstance(safety_stock, int)
                or safety_stock < 0
            ):
                raise ValidationError("safety_stock must be a non-negative number")
        if on_hand is not None:
            self._check_on_hand(on_hand)
            self.on_hand = on_hand
        if safety_stock is not None:
            self.safety_stock = safety_stock

    def _check_on_hand(self, new_on_hand: int) -> None:
        if new_on_hand < 0:
            raise BusinessRuleViolation(
                f"On-hand stock for {self.flavor_name} cannot go below zero"
            )
        if new_on_hand < self.reserved:
            raise BusinessRuleViolation(
                f"On-hand stock for {self.flavor_name} cannot drop below "
                f"the {self.reserved} units currently reserved"
            )
