"""Concurrent shoppers must never oversell a flavor."""

import threading

from candystore.application.add_to_cart import AddToCartHandler
from candystore.application.remove_cart_line import RemoveCartLineHandler
from candystore.domain.exceptions import InsufficientStockError
from candystore.domain.model.cart import UserIdentity
from tests.fakes import RED_TWIST, TRADITIONAL, seeded_uow


def _run_concurrently(target, count: int) -> None:
    barrier = threading.Barrier(count)

    def worker(i: int) -> None:
        barrier.wait()
        target(i)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()


class TestConcurrentAddToCart:

    def test_only_sellable_packs_are_reserved(self):
        uow = seeded_uow()
        # 20 on hand, 5 safety: room for exactly 5 packs of three
        uow.inventory._store[RED_TWIST].on_hand = 20
        handler = AddToCartHandler(uow)
        successes: list[int] = []
        rejections: list[InsufficientStockError] = []

        def shopper(i: int) -> None:
            try:
                handler.handle(UserIdentity(f"user-{i}"), "3-pack", TRADITIONAL, 1)
                successes.append(i)
            except InsufficientStockError as exc:
                rejections.append(exc)

        _run_concurrently(shopper, 20)

        record = uow.inventory.get_by_flavor_id(RED_TWIST)
        assert len(successes) == 5
        assert len(rejections) == 15
        assert record.reserved == 15
        assert record.available_after_safety == 0
        assert all(exc.flavor_name == "Red Twist" for exc in rejections)

    def test_add_and_remove_leave_no_residue(self):
        uow = seeded_uow()
        add = AddToCartHandler(uow)
        remove = RemoveCartLineHandler(uow)

        def shopper(i: int) -> None:
            user = UserIdentity(f"user-{i}")
            line = add.handle(user, "3-pack", TRADITIONAL, 2)
            remove.handle(user, line.id)

        _run_concurrently(shopper, 10)

        assert uow.inventory.get_by_flavor_id(RED_TWIST).reserved == 0
