"""Integration tests for the UpdateCartLine use case."""

import pytest

from candystore.application.add_to_cart import AddToCartHandler
from candystore.application.update_cart_line import UpdateCartLineHandler
from candystore.domain.exceptions import (
    CartLineNotFoundError,
    InsufficientStockError,
    InvalidQuantityError,
)
from candystore.domain.model.cart import UserIdentity
from tests.fakes import CHERRY, RED_TWIST, SOUR, TRADITIONAL, WATERMELON, seeded_uow

ALICE = UserIdentity("alice")


def _setup(recipe_id: int = TRADITIONAL, qty: int = 10):
    uow = seeded_uow()
    line = AddToCartHandler(uow).handle(ALICE, "3-pack", recipe_id, qty)
    return uow, line


def _reserved(uow, flavor_id: int) -> int:
    return uow.inventory.get_by_flavor_id(flavor_id).reserved


class TestUpdateGrowsLine:

    def test_reserves_only_the_delta(self):
        uow, line = _setup(qty=10)

        dto = UpdateCartLineHandler(uow).handle(ALICE, line.id, 20)

        assert dto.quantity == 20
        assert dto.total == 540
        assert _reserved(uow, RED_TWIST) == 60

    def test_red_twist_scenario_rejects_oversized_delta(self):
        # 120 on hand, 5 safety, 30 reserved -> 85 sellable; 40 more packs need 120
        uow, line = _setup(qty=10)

        with pytest.raises(InsufficientStockError) as excinfo:
            UpdateCartLineHandler(uow).handle(ALICE, line.id, 50)

        assert excinfo.value.flavor_name == "Red Twist"
        assert excinfo.value.available == 85
        assert excinfo.value.required == 120
        assert uow.carts.get_by_id(line.id).quantity == 10
        assert _reserved(uow, RED_TWIST) == 30

    def test_all_or_nothing_on_growth(self):
        uow, line = _setup(recipe_id=SOUR, qty=5)

        with pytest.raises(InsufficientStockError, match="Cherry"):
            UpdateCartLineHandler(uow).handle(ALICE, line.id, 9)

        assert _reserved(uow, WATERMELON) == 5
        assert _reserved(uow, CHERRY) == 5


class TestUpdateShrinksLine:

    def test_releases_the_surplus(self):
        uow, line = _setup(qty=10)

        UpdateCartLineHandler(uow).handle(ALICE, line.id, 4)

        assert _reserved(uow, RED_TWIST) == 12

    def test_same_quantity_changes_nothing(self):
        uow, line = _setup(qty=10)
        UpdateCartLineHandler(uow).handle(ALICE, line.id, 10)
        assert _reserved(uow, RED_TWIST) == 30


class TestUpdateValidation:

    @pytest.mark.parametrize("qty", [0, -1, "abc"])
    def test_bad_quantity_rejected(self, qty):
        uow, line = _setup(qty=10)
        with pytest.raises(InvalidQuantityError):
            UpdateCartLineHandler(uow).handle(ALICE, line.id, qty)
        assert _reserved(uow, RED_TWIST) == 30

    def test_unknown_line(self):
        uow, _ = _setup()
        with pytest.raises(CartLineNotFoundError, match="Cart line not found"):
            UpdateCartLineHandler(uow).handle(ALICE, 999, 1)

    def test_other_users_line_is_not_found(self):
        uow, line = _setup()
        with pytest.raises(CartLineNotFoundError):
            UpdateCartLineHandler(uow).handle(UserIdentity("mallory"), line.id, 1)
        assert uow.carts.get_by_id(line.id).quantity == 10
