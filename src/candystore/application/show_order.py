"""Application service: Show Order use cases (queries)."""

from __future__ import annotations

from candystore.application.checkout import order_dto
from candystore.application.dto import OrderDTO
from candystore.domain.exceptions import EntityNotFoundError
from candystore.domain.model.cart import UserIdentity
from candystore.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order_dto(order)


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user: UserIdentity) -> list[OrderDTO]:
        with self._uow as uow:
            orders = uow.orders.list_for_user(user.id)
        return [order_dto(order) for order in orders]
