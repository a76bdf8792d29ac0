"""Application service: Checkout use case (order materialization).

Turns the user's open 3-pack lines into an order in one transaction:

1. Load every cart line with its recipe (an empty cart is rejected).
2. Convert each line's reservation into a permanent stock decrement:
   ``on_hand`` and ``reserved`` both drop by the held units.
3. Build OrderLineItems with the line's price and SKU (snapshot).
4. Persist the order and delete the cart lines.

Payment collection happens elsewhere; the order starts PENDING.
"""

from __future__ import annotations

from candystore.application.dto import OrderDTO, OrderLineItemDTO
from candystore.domain.exceptions import ValidationError
from candystore.domain.model.cart import UserIdentity
from candystore.domain.model.order import Order, OrderLineItem
from candystore.domain.model.value_objects import Quantity
from candystore.domain.repository.unit_of_work import UnitOfWork
from candystore.domain.service.inventory_ledger import InventoryLedger
from candystore.domain.service.logging_utils import get_service_logger, log_operation
from candystore.domain.service.pack_reservation_service import PackReservationService

logger = get_service_logger(__name__)


class CheckoutHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        user: UserIdentity,
        shipping_address: str | None = None,
        notes: str | None = None,
    ) -> OrderDTO:
        with self._uow as uow:
            lines = uow.carts.list_for_user(user.id)
            if not lines:
                raise ValidationError("Cart is empty")

            reservations = PackReservationService(uow.recipes, InventoryLedger(uow.inventory))
            order_items: list[OrderLineItem] = []
            for line in lines:
                recipe = reservations.load_recipe(line.recipe_id)
                reservations.consume_packs(recipe, line.quantity)
                order_items.append(
                    OrderLineItem(
                        recipe_id=line.recipe_id,
                        recipe_title=recipe.title,
                        sku=line.sku,
                        quantity=Quantity(line.quantity),
                        unit_price=line.unit_price,  # <-- price snapshot
                    )
                )

            order = Order.create(
                user_id=user.id,
                items=order_items,
                shipping_address=shipping_address,
                notes=notes,
            )
            uow.orders.add(order)
            uow.carts.delete_for_user(user.id)
            uow.commit()

        log_operation(
            logger,
            operation="checkout",
            outcome="success",
            user_id=user.id,
            order_id=order.id,
            lines=len(order_items),
            total=order.total.amount,
        )
        return order_dto(order)


def order_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        user_id=order.user_id,
        status=order.status.value,
        items=[
            OrderLineItemDTO(
                recipe_id=item.recipe_id,
                recipe_title=item.recipe_title,
                sku=item.sku,
                quantity=item.quantity.value,
                unit_price=item.unit_price.amount,
                line_total=item.line_total.amount,
            )
            for item in order.items
        ],
        total=order.total.amount,
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        shipping_address=order.shipping_address,
        notes=order.notes,
    )
