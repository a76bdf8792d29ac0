"""Integration tests for checkout and the order queries."""

from decimal import Decimal

import pytest

from candystore.application.add_to_cart import AddToCartHandler
from candystore.application.checkout import CheckoutHandler
from candystore.application.show_order import ListOrdersHandler, ShowOrderHandler
from candystore.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from candystore.domain.model.cart import UserIdentity
from tests.fakes import CHERRY, RED_TWIST, SOUR, TRADITIONAL, WATERMELON, seeded_uow

ALICE = UserIdentity("alice")


def _setup():
    uow = seeded_uow()
    add = AddToCartHandler(uow)
    add.handle(ALICE, "3-pack", TRADITIONAL, 2)
    add.handle(ALICE, "3-pack", SOUR, 1)
    return uow


class TestCheckout:

    def test_creates_pending_order(self):
        uow = _setup()

        order = CheckoutHandler(uow).handle(ALICE, shipping_address="1 Candy Lane")

        assert order.id is not None
        assert order.status == "PENDING"
        assert order.total == Decimal("81.00")
        assert order.shipping_address == "1 Candy Lane"
        assert {item.sku for item in order.items} == {"3P-TRD-REDx3", "3P-SOR-WAT-CHE-BERDEL"}

    def test_consumes_reservations(self):
        uow = _setup()

        CheckoutHandler(uow).handle(ALICE)

        red = uow.inventory.get_by_flavor_id(RED_TWIST)
        assert (red.on_hand, red.reserved) == (114, 0)
        cherry = uow.inventory.get_by_flavor_id(CHERRY)
        assert (cherry.on_hand, cherry.reserved) == (9, 0)

    def test_empties_the_cart(self):
        uow = _setup()
        CheckoutHandler(uow).handle(ALICE)
        assert uow.carts.list_for_user("alice") == []

    def test_empty_cart_rejected(self):
        uow = seeded_uow()
        with pytest.raises(ValidationError, match="Cart is empty"):
            CheckoutHandler(uow).handle(ALICE)

    def test_failure_leaves_cart_and_stock_alone(self):
        uow = _setup()
        # Watermelon was written off below what the cart holds
        uow.inventory._store[WATERMELON].on_hand = 0

        with pytest.raises(InsufficientStockError, match="Watermelon"):
            CheckoutHandler(uow).handle(ALICE)

        assert len(uow.carts.list_for_user("alice")) == 2
        assert uow.inventory.get_by_flavor_id(RED_TWIST).on_hand == 120
        assert uow.orders.list_for_user("alice") == []


class TestOrderQueries:

    def test_show_order(self):
        uow = _setup()
        placed = CheckoutHandler(uow).handle(ALICE, notes="gift wrap")

        shown = ShowOrderHandler(uow).handle(placed.id)

        assert shown == placed
        assert shown.notes == "gift wrap"

    def test_show_missing_order(self):
        uow = seeded_uow()
        with pytest.raises(EntityNotFoundError, match="Order #7 not found"):
            ShowOrderHandler(uow).handle(7)

    def test_list_orders_for_user(self):
        uow = _setup()
        CheckoutHandler(uow).handle(ALICE)
        AddToCartHandler(uow).handle(ALICE, "3-pack", TRADITIONAL, 1)
        CheckoutHandler(uow).handle(ALICE)

        orders = ListOrdersHandler(uow).handle(ALICE)

        assert len(orders) == 2
        assert ListOrdersHandler(uow).handle(UserIdentity("bob")) == []
