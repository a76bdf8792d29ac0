"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from candystore.domain.model.order import Order, OrderLineItem, OrderStatus
from candystore.domain.model.value_objects import Money, Quantity
from candystore.domain.repository.order_repository import OrderRepository
from candystore.infrastructure.persistence.orm import OrderItemRow, OrderRow


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, order_id: int) -> Order | None:
        row = self._session.scalars(
            select(OrderRow)
            .options(selectinload(OrderRow.items))
            .where(OrderRow.id == order_id)
        ).first()
        return _to_domain(row) if row is not None else None

    def list_for_user(self, user_id: str) -> list[Order]:
        rows = self._session.scalars(
            select(OrderRow)
            .options(selectinload(OrderRow.items))
            .where(OrderRow.user_id == user_id)
            .order_by(OrderRow.created_at.desc(), OrderRow.id.desc())
        )
        return [_to_domain(row) for row in rows]

    def add(self, order: Order) -> None:
        row = OrderRow(
            user_id=order.user_id,
            status=order.status.value,
            total=order.total.amount,
            shipping_address=order.shipping_address,
            notes=order.notes,
            created_at=order.created_at,
            items=[
                OrderItemRow(
                    recipe_id=item.recipe_id,
                    recipe_title=item.recipe_title,
                    sku=item.sku,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.amount,
                    currency=item.unit_price.currency,
                )
                for item in order.items
            ],
        )
        self._session.add(row)
        self._session.flush()
        order.id = row.id


def _to_domain(row: OrderRow) -> Order:
    return Order(
        id=row.id,
        user_id=row.user_id,
        items=[
            OrderLineItem(
                recipe_id=item.recipe_id,
                recipe_title=item.recipe_title,
                sku=item.sku,
                quantity=Quantity(item.quantity),
                unit_price=Money.of(item.unit_price, item.currency),
            )
            for item in row.items
        ],
        status=OrderStatus(row.status),
        shipping_address=row.shipping_address,
        notes=row.notes,
        created_at=row.created_at,
    )
