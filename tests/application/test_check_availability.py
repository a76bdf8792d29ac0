"""Integration tests for the CheckAvailability query."""

import pytest

from candystore.application.add_to_cart import AddToCartHandler
from candystore.application.check_availability import CheckAvailabilityHandler
from candystore.domain.exceptions import (
    InvalidQuantityError,
    InvalidRecipeError,
    ValidationError,
)
from candystore.domain.model.cart import UserIdentity
from tests.fakes import CHERRY, RED_TWIST, SOUR, TRADITIONAL, seeded_uow


class TestCheckAvailability:

    def test_purchasable_recipe(self):
        uow = seeded_uow()

        result = CheckAvailabilityHandler(uow).handle(TRADITIONAL, 10)

        assert result.is_purchasable is True
        assert result.limiting_factor is None
        assert result.requested_qty == 10
        [detail] = result.availability
        assert detail.flavor_id == RED_TWIST
        assert detail.required == 30
        assert detail.available_after_safety == 115

    def test_reports_limiting_flavor(self):
        uow = seeded_uow()

        result = CheckAvailabilityHandler(uow).handle(SOUR, 9)

        assert result.is_purchasable is False
        assert result.limiting_factor.flavor_name == "Cherry"
        assert result.limiting_factor.available == 8
        assert result.limiting_factor.required == 9
        assert [d.flavor_name for d in result.availability] == [
            "Watermelon",
            "Cherry",
            "Berry Delight",
        ]

    def test_default_quantity_is_one(self):
        uow = seeded_uow()
        result = CheckAvailabilityHandler(uow).handle(SOUR)
        assert result.requested_qty == 1
        assert all(d.required == 1 for d in result.availability)

    def test_query_does_not_touch_stock(self):
        uow = seeded_uow()
        handler = CheckAvailabilityHandler(uow)

        first = handler.handle(TRADITIONAL, "5")
        second = handler.handle(TRADITIONAL, "5")

        assert first == second
        assert uow.inventory.get_by_flavor_id(RED_TWIST).reserved == 0
        assert uow.commits == 0

    def test_reflects_reservations(self):
        uow = seeded_uow()
        AddToCartHandler(uow).handle(UserIdentity("alice"), "3-pack", SOUR, 5)

        result = CheckAvailabilityHandler(uow).handle(SOUR, 4)

        cherry = next(d for d in result.availability if d.flavor_id == CHERRY)
        assert cherry.reserved == 5
        assert cherry.available == 5
        assert cherry.available_after_safety == 3
        assert result.is_purchasable is False

    def test_purchasable_answer_matches_reservation(self):
        uow = seeded_uow()
        # 115 sellable units of Red Twist cover 38 packs but not 39
        assert CheckAvailabilityHandler(uow).handle(TRADITIONAL, 38).is_purchasable
        assert not CheckAvailabilityHandler(uow).handle(TRADITIONAL, 39).is_purchasable

        AddToCartHandler(uow).handle(UserIdentity("alice"), "3-pack", TRADITIONAL, 38)
        assert uow.inventory.get_by_flavor_id(RED_TWIST).available_after_safety == 1

    def test_missing_inventory_row_is_unavailable(self):
        uow = seeded_uow()
        uow.inventory.delete(CHERRY)

        result = CheckAvailabilityHandler(uow).handle(SOUR, 1)

        assert result.is_purchasable is False
        assert result.limiting_factor.flavor_name == "Cherry"
        assert result.limiting_factor.available == 0

    def test_recipe_id_required(self):
        uow = seeded_uow()
        with pytest.raises(ValidationError, match="recipe_id is required"):
            CheckAvailabilityHandler(uow).handle(None)

    def test_unknown_recipe(self):
        uow = seeded_uow()
        with pytest.raises(InvalidRecipeError):
            CheckAvailabilityHandler(uow).handle(404)

    @pytest.mark.parametrize("qty", ["0", "-1", "two"])
    def test_bad_quantity(self, qty):
        uow = seeded_uow()
        with pytest.raises(InvalidQuantityError):
            CheckAvailabilityHandler(uow).handle(TRADITIONAL, qty)
