"""Tests for the InventoryLedger domain service."""

import logging

import pytest

from candystore.domain.exceptions import (
    BusinessRuleViolation,
    FlavorNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from candystore.domain.model.inventory import InventoryRecord
from candystore.domain.model.pack_recipe import StockRequirement
from candystore.domain.service.inventory_ledger import InventoryLedger, ReleaseDriftCounter
from tests.fakes import FakeInventoryRepository


def _setup(**overrides):
    records = [
        InventoryRecord(1, "Red Twist", on_hand=120, safety_stock=5),
        InventoryRecord(2, "Cherry", on_hand=10, safety_stock=2),
        InventoryRecord(3, "Watermelon", on_hand=50),
    ]
    repo = FakeInventoryRepository(records)
    drift = ReleaseDriftCounter()
    return repo, InventoryLedger(repo, drift_counter=drift), drift


class TestGetAvailability:

    def test_reports_all_counters(self):
        repo, ledger, _ = _setup()
        ledger.reserve(1, 30)

        snapshot = ledger.get_availability(1)

        assert snapshot.on_hand == 120
        assert snapshot.reserved == 30
        assert snapshot.safety_stock == 5
        assert snapshot.available == 90
        assert snapshot.available_after_safety == 85

    def test_unknown_flavor(self):
        _, ledger, _ = _setup()
        with pytest.raises(FlavorNotFoundError):
            ledger.get_availability(99)


class TestReserveAll:

    def test_reserves_every_flavor(self):
        repo, ledger, _ = _setup()

        ledger.reserve_all([StockRequirement(1, "Red Twist", 6), StockRequirement(3, "Watermelon", 3)])

        assert repo.get_by_flavor_id(1).reserved == 6
        assert repo.get_by_flavor_id(3).reserved == 3

    def test_all_or_nothing(self):
        repo, ledger, _ = _setup()

        # Cherry can sell 8; Red Twist alone would fit
        with pytest.raises(InsufficientStockError, match="Cherry. Available: 8, Required: 9"):
            ledger.reserve_all([StockRequirement(1, "Red Twist", 9), StockRequirement(2, "Cherry", 9)])

        assert repo.get_by_flavor_id(1).reserved == 0
        assert repo.get_by_flavor_id(2).reserved == 0

    def test_names_first_limiting_flavor_in_order(self):
        _, ledger, _ = _setup()
        with pytest.raises(InsufficientStockError) as excinfo:
            ledger.reserve_all(
                [StockRequirement(2, "Cherry", 200), StockRequirement(1, "Red Twist", 200)]
            )
        assert excinfo.value.flavor_name == "Cherry"

    def test_locks_rows_in_flavor_id_order(self):
        repo, ledger, _ = _setup()
        ledger.reserve_all([StockRequirement(3, "Watermelon", 1), StockRequirement(1, "Red Twist", 1)])
        assert repo.lock_calls == [[1, 3]]

    def test_repeated_flavor_is_summed(self):
        _, ledger, _ = _setup()
        with pytest.raises(InsufficientStockError, match="Required: 10"):
            ledger.reserve_all([StockRequirement(2, "Cherry", 5), StockRequirement(2, "Cherry", 5)])

    def test_missing_inventory_row_counts_as_empty(self):
        _, ledger, _ = _setup()
        with pytest.raises(InsufficientStockError, match="Mystery. Available: 0, Required: 3"):
            ledger.reserve_all([StockRequirement(42, "Mystery", 3)])

    def test_non_positive_units_rejected(self):
        _, ledger, _ = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            ledger.reserve_all([StockRequirement(1, "Red Twist", 0)])

    def test_conditional_increment_refusal_raises(self):
        repo, ledger, _ = _setup()
        # Simulate another writer winning between validation and update
        repo.increment_reserved = lambda flavor_id, units: False

        with pytest.raises(InsufficientStockError, match="Red Twist"):
            ledger.reserve_all([StockRequirement(1, "Red Twist", 3)])


class TestReleaseAll:

    def test_release_gives_units_back(self):
        repo, ledger, drift = _setup()
        ledger.reserve(1, 30)

        ledger.release(1, 30)

        assert repo.get_by_flavor_id(1).reserved == 0
        assert drift.count == 0

    def test_release_clamps_and_signals_drift(self, caplog):
        repo, ledger, drift = _setup()
        ledger.reserve(1, 4)

        with caplog.at_level(logging.WARNING, logger="candystore.services"):
            ledger.release(1, 10)

        assert repo.get_by_flavor_id(1).reserved == 0
        assert drift.count == 1
        assert drift.units == 6
        assert any("release_clamped" in r.getMessage() for r in caplog.records)

    def test_release_unknown_flavor(self):
        _, ledger, _ = _setup()
        with pytest.raises(FlavorNotFoundError):
            ledger.release_all([StockRequirement(42, "Mystery", 1)])


class TestConsumeAll:

    def test_consume_decrements_on_hand_and_reserved(self):
        repo, ledger, _ = _setup()
        ledger.reserve(3, 9)

        ledger.consume_all([StockRequirement(3, "Watermelon", 9)])

        record = repo.get_by_flavor_id(3)
        assert record.on_hand == 41
        assert record.reserved == 0


class TestAdminLevels:

    def test_adjust_on_hand(self):
        repo, ledger, _ = _setup()
        ledger.adjust_on_hand(2, 15)
        assert repo.get_by_flavor_id(2).on_hand == 25

    def test_adjust_on_hand_keeps_reserved_covered(self):
        repo, ledger, _ = _setup()
        ledger.reserve(2, 8)
        with pytest.raises(BusinessRuleViolation):
            ledger.adjust_on_hand(2, -5)
        assert repo.get_by_flavor_id(2).on_hand == 10

    def test_set_levels_never_touches_reserved(self):
        repo, ledger, _ = _setup()
        ledger.reserve(1, 30)

        ledger.set_levels(1, on_hand=200, safety_stock=0)

        record = repo.get_by_flavor_id(1)
        assert (record.on_hand, record.reserved, record.safety_stock) == (200, 30, 0)


class TestReleaseDriftCounter:

    def test_reset(self):
        drift = ReleaseDriftCounter()
        drift.record(3)
        drift.reset()
        assert (drift.count, drift.units) == (0, 0)
