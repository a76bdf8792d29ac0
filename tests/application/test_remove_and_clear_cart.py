"""Integration tests for removing lines, clearing and showing the cart."""

import logging
from decimal import Decimal

import pytest

from candystore.application.add_to_cart import AddToCartHandler
from candystore.application.clear_cart import ClearCartHandler
from candystore.application.remove_cart_line import RemoveCartLineHandler
from candystore.application.show_cart import ShowCartHandler
from candystore.domain.exceptions import CartLineNotFoundError
from candystore.domain.model.cart import UserIdentity
from tests.fakes import BERRY, CHERRY, RED_TWIST, SOUR, TRADITIONAL, WATERMELON, seeded_uow

ALICE = UserIdentity("alice")
BOB = UserIdentity("bob")


def _sellable(uow, flavor_id: int) -> int:
    return uow.inventory.get_by_flavor_id(flavor_id).available_after_safety


class TestRemoveCartLine:

    def test_round_trip_restores_availability(self):
        uow = seeded_uow()
        line = AddToCartHandler(uow).handle(ALICE, "3-pack", TRADITIONAL, 10)
        assert _sellable(uow, RED_TWIST) == 85

        RemoveCartLineHandler(uow).handle(ALICE, line.id)

        assert _sellable(uow, RED_TWIST) == 115
        assert uow.carts.get_by_id(line.id) is None

    def test_round_trip_mixed_recipe(self):
        uow = seeded_uow()
        before = {f: uow.inventory.get_by_flavor_id(f).reserved for f in (WATERMELON, CHERRY, BERRY)}
        line = AddToCartHandler(uow).handle(ALICE, "3-pack", SOUR, 3)

        RemoveCartLineHandler(uow).handle(ALICE, line.id)

        after = {f: uow.inventory.get_by_flavor_id(f).reserved for f in (WATERMELON, CHERRY, BERRY)}
        assert after == before

    def test_unknown_line(self):
        uow = seeded_uow()
        with pytest.raises(CartLineNotFoundError):
            RemoveCartLineHandler(uow).handle(ALICE, 12345)

    def test_cannot_remove_someone_elses_line(self):
        uow = seeded_uow()
        line = AddToCartHandler(uow).handle(ALICE, "3-pack", TRADITIONAL, 1)

        with pytest.raises(CartLineNotFoundError):
            RemoveCartLineHandler(uow).handle(BOB, line.id)
        assert uow.inventory.get_by_flavor_id(RED_TWIST).reserved == 3


class TestClearCart:

    def test_clear_releases_every_line(self):
        uow = seeded_uow()
        add = AddToCartHandler(uow)
        add.handle(ALICE, "3-pack", TRADITIONAL, 2)
        add.handle(ALICE, "3-pack", SOUR, 1)
        add.handle(BOB, "3-pack", TRADITIONAL, 1)

        result = ClearCartHandler(uow).handle(ALICE)

        assert result.lines_removed == 2
        assert result.release_failures == 0
        assert uow.carts.list_for_user("alice") == []
        assert uow.inventory.get_by_flavor_id(RED_TWIST).reserved == 3  # Bob's pack
        assert uow.inventory.get_by_flavor_id(CHERRY).reserved == 0

    def test_empty_cart(self):
        uow = seeded_uow()
        result = ClearCartHandler(uow).handle(ALICE)
        assert result.lines_removed == 0

    def test_release_failure_is_reported_not_raised(self, caplog):
        uow = seeded_uow()
        add = AddToCartHandler(uow)
        add.handle(ALICE, "3-pack", SOUR, 1)
        add.handle(ALICE, "3-pack", TRADITIONAL, 1)
        # Cherry's inventory row vanished behind our back
        uow.inventory.delete(CHERRY)

        with caplog.at_level(logging.ERROR, logger="candystore.services"):
            result = ClearCartHandler(uow).handle(ALICE)

        assert result.lines_removed == 2
        assert result.release_failures == 1
        assert uow.inventory.get_by_flavor_id(WATERMELON).reserved == 0
        assert uow.inventory.get_by_flavor_id(RED_TWIST).reserved == 0
        assert any("release_failed" in r.getMessage() for r in caplog.records)


class TestShowCart:

    def test_totals_and_order(self):
        uow = seeded_uow()
        add = AddToCartHandler(uow)
        add.handle(ALICE, "3-pack", TRADITIONAL, 2)
        add.handle(ALICE, "3-pack", SOUR, 1)

        cart = ShowCartHandler(uow).handle(ALICE)

        assert cart.total_items == 2
        assert cart.cart_total == Decimal("81.00")
        assert [line.recipe_title for line in cart.lines] == ["Sour Mix", "Traditional"]
        assert cart.lines[0].recipe_kind == "Sour"

    def test_only_own_lines(self):
        uow = seeded_uow()
        AddToCartHandler(uow).handle(BOB, "3-pack", TRADITIONAL, 2)

        cart = ShowCartHandler(uow).handle(ALICE)

        assert cart.lines == []
        assert cart.cart_total == Decimal("0")
