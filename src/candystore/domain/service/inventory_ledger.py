"""Domain service: Inventory Ledger.

The ledger is the only code allowed to move ``reserved``. It works on the
repositories of the caller's unit of work, so every multi-flavor change it
makes commits or rolls back together with the rest of the request.

Multi-flavor reservations use the two-phase approach:

  Phase 1 (lock and validate): lock every touched row and make sure
  each flavor can cover its units. Fails before any mutation.

  Phase 2 (mutate): apply conditional increments. If the store still
  refuses one (a concurrent writer got there first), the error
  propagates and the transaction rolls back as a whole.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from candystore.domain.exceptions import (
    FlavorNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from candystore.domain.model.inventory import InventoryRecord
from candystore.domain.model.pack_recipe import StockRequirement
from candystore.domain.repository.inventory_repository import InventoryRepository
from candystore.domain.service.logging_utils import get_service_logger, log_operation

logger = get_service_logger(__name__)


@dataclass(frozen=True)
class FlavorAvailability:
    flavor_id: int
    flavor_name: str
    on_hand: int
    reserved: int
    safety_stock: int
    available: int
    available_after_safety: int

    @staticmethod
    def of(record: InventoryRecord) -> FlavorAvailability:
        return FlavorAvailability(
            flavor_id=record.flavor_id,
            flavor_name=record.flavor_name,
            on_hand=record.on_hand,
            reserved=record.reserved,
            safety_stock=record.safety_stock,
            available=record.available,
            available_after_safety=record.available_after_safety,
        )


class ReleaseDriftCounter:
    """Counts releases that asked for more than was reserved.

    Any non-zero value means a reservation and its release disagreed
    somewhere upstream.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._count = 0
        self._units = 0

    def record(self, units: int) -> None:
        with self._lock:
            self._count += 1
            self._units += units

    @property
    def count(self) -> int:
        return self._count

    @property
    def units(self) -> int:
        return self._units

    def reset(self) -> None:
        with self._lock:
            self._count = 0
            self._units = 0


release_drift = ReleaseDriftCounter()


class InventoryLedger:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        drift_counter: ReleaseDriftCounter = release_drift,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._drift = drift_counter

    # --- Queries --------------------------------------------------------------

    def get_availability(self, flavor_id: int) -> FlavorAvailability:
        record = self._inventory_repo.get_by_flavor_id(flavor_id)
        if record is None:
            raise FlavorNotFoundError(f"No inventory record for flavor ID {flavor_id}")
        return FlavorAvailability.of(record)

    # --- Single-flavor mutations ----------------------------------------------

    def reserve(self, flavor_id: int, amount: int) -> None:
        record = self._require(flavor_id)
        self.reserve_all([StockRequirement(flavor_id, record.flavor_name, amount)])

    def release(self, flavor_id: int, amount: int) -> None:
        record = self._require(flavor_id)
        self.release_all([StockRequirement(flavor_id, record.flavor_name, amount)])

    def adjust_on_hand(self, flavor_id: int, delta: int) -> InventoryRecord:
        """Restock or write off physical units of one flavor."""
        record = self._lock_one(flavor_id)
        record.adjust_on_hand(delta)
        self._inventory_repo.save(record)
        log_operation(
            logger,
            operation="adjust_on_hand",
            outcome="success",
            flavor_id=flavor_id,
            delta=delta,
            on_hand=record.on_hand,
        )
        return record

    def set_levels(
        self,
        flavor_id: int,
        on_hand: int | None = None,
        safety_stock: int | None = None,
    ) -> InventoryRecord:
        record = self._lock_one(flavor_id)
        record.set_levels(on_hand=on_hand, safety_stock=safety_stock)
        self._inventory_repo.save(record)
        log_operation(
            logger,
            operation="set_levels",
            outcome="success",
            flavor_id=flavor_id,
            on_hand=record.on_hand,
            safety_stock=record.safety_stock,
        )
        return record

    # --- Multi-flavor mutations -----------------------------------------------

    def reserve_all(self, requirements: list[StockRequirement]) -> None:
        """Reserve every requirement or none of them.

        Raises InsufficientStockError naming the first flavor, in the order
        given, that cannot cover its units.
        """
        merged = _merge(requirements)
        if not merged:
            return

        # Phase 1: lock and validate
        records = self._inventory_repo.lock([req.flavor_id for req in merged])
        for req in merged:
            record = records.get(req.flavor_id)
            if record is None:
                raise InsufficientStockError(req.flavor_name, 0, req.units)
            if not record.can_cover(req.units):
                raise InsufficientStockError(
                    req.flavor_name, record.available_after_safety, req.units
                )

        # Phase 2: conditional increments
        for req in merged:
            if not self._inventory_repo.increment_reserved(req.flavor_id, req.units):
                current = self._inventory_repo.get_by_flavor_id(req.flavor_id)
                available = current.available_after_safety if current else 0
                raise InsufficientStockError(req.flavor_name, available, req.units)

    def release_all(self, requirements: list[StockRequirement]) -> None:
        """Give back reserved units. Releasing is always permitted.

        Raises FlavorNotFoundError if a flavor has no inventory record.
        """
        merged = _merge(requirements)
        if not merged:
            return
        records = self._inventory_repo.lock([req.flavor_id for req in merged])
        for req in merged:
            record = records.get(req.flavor_id)
            if record is None:
                raise FlavorNotFoundError(
                    f"No inventory record for flavor '{req.flavor_name}'"
                )
            self._note_clamp(record, req, operation="release")
            self._inventory_repo.decrement_reserved(req.flavor_id, req.units)

    def consume_all(self, requirements: list[StockRequirement]) -> None:
        """Convert reservations into permanent stock decrements (checkout)."""
        merged = _merge(requirements)
        if not merged:
            return
        records = self._inventory_repo.lock([req.flavor_id for req in merged])
        for req in merged:
            record = records.get(req.flavor_id)
            if record is None:
                raise InsufficientStockError(req.flavor_name, 0, req.units)
            if record.on_hand < req.units:
                raise InsufficientStockError(req.flavor_name, record.on_hand, req.units)
        for req in merged:
            self._note_clamp(records[req.flavor_id], req, operation="consume")
            if not self._inventory_repo.consume(req.flavor_id, req.units):
                current = self._inventory_repo.get_by_flavor_id(req.flavor_id)
                on_hand = current.on_hand if current else 0
                raise InsufficientStockError(req.flavor_name, on_hand, req.units)

    # --- Internal helpers -----------------------------------------------------

    def _require(self, flavor_id: int) -> InventoryRecord:
        record = self._inventory_repo.get_by_flavor_id(flavor_id)
        if record is None:
            raise FlavorNotFoundError(f"No inventory record for flavor ID {flavor_id}")
        return record

    def _lock_one(self, flavor_id: int) -> InventoryRecord:
        record = self._inventory_repo.lock([flavor_id]).get(flavor_id)
        if record is None:
            raise FlavorNotFoundError(f"No inventory record for flavor ID {flavor_id}")
        return record

    def _note_clamp(
        self, record: InventoryRecord, req: StockRequirement, operation: str
    ) -> None:
        shortfall = req.units - record.reserved
        if shortfall <= 0:
            return
        self._drift.record(shortfall)
        log_operation(
            logger,
            operation=operation,
            outcome="release_clamped",
            level=logging.WARNING,
            flavor_id=req.flavor_id,
            flavor_name=req.flavor_name,
            requested=req.units,
            reserved=record.reserved,
            shortfall=shortfall,
        )


def _merge(requirements: list[StockRequirement]) -> list[StockRequirement]:
    """Sum units per flavor, keeping first-seen order."""
    totals: dict[int, StockRequirement] = {}
    for req in requirements:
        if req.units <= 0:
            raise ValidationError(
                f"Stock quantity for {req.flavor_name} must be positive"
            )
        seen = totals.get(req.flavor_id)
        if seen is None:
            totals[req.flavor_id] = req
        else:
            totals[req.flavor_id] = StockRequirement(
                req.flavor_id, seen.flavor_name, seen.units + req.units
            )
    return list(totals.values())
