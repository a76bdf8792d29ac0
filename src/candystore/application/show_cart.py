"""Application service: Show 3-pack cart use case (query)."""

from __future__ import annotations

from candystore.application.dto import CartDTO, CartLineDTO, cart_line_dto
from candystore.domain.model.cart import UserIdentity
from candystore.domain.model.value_objects import Money
from candystore.domain.repository.unit_of_work import UnitOfWork


class ShowCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user: UserIdentity) -> CartDTO:
        lines: list[CartLineDTO] = []
        total = Money.zero()
        with self._uow as uow:
            for line in uow.carts.list_for_user(user.id):
                recipe = uow.recipes.get_by_id(line.recipe_id)
                if recipe is None:
                    continue
                lines.append(cart_line_dto(line, recipe))
                total = total + line.line_total
        return CartDTO(lines=lines, total_items=len(lines), cart_total=total.amount)
