"""SQLAlchemy-backed implementation of CartRepository."""

from __future__ import annotations

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from candystore.domain.exceptions import DuplicateCartLineError
from candystore.domain.model.cart import CartLine
from candystore.domain.model.value_objects import Money
from candystore.domain.repository.cart_repository import CartRepository
from candystore.infrastructure.persistence.orm import CartLineRow


class SqlCartRepository(CartRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- CartRepository interface ---------------------------------------------

    def get_by_id(self, line_id: int) -> CartLine | None:
        row = self._session.get(CartLineRow, line_id)
        return _to_domain(row) if row is not None else None

    def find_line(self, user_id: str, product_id: str, recipe_id: int) -> CartLine | None:
        row = self._session.scalars(
            select(CartLineRow).where(
                CartLineRow.user_id == user_id,
                CartLineRow.product_id == product_id,
                CartLineRow.recipe_id == recipe_id,
            )
        ).first()
        return _to_domain(row) if row is not None else None

    def list_for_user(self, user_id: str) -> list[CartLine]:
        rows = self._session.scalars(
            select(CartLineRow)
            .where(CartLineRow.user_id == user_id)
            .order_by(CartLineRow.created_at.desc(), CartLineRow.id.desc())
        )
        return [_to_domain(row) for row in rows]

    def add(self, line: CartLine) -> None:
        row = CartLineRow(
            user_id=line.user_id,
            product_id=line.product_id,
            recipe_id=line.recipe_id,
            quantity=line.quantity,
            unit_price=line.unit_price.amount,
            currency=line.unit_price.currency,
            sku=line.sku,
            created_at=line.created_at,
        )
        self._session.add(row)
        try:
            self._session.flush()
        except IntegrityError as exc:
            raise DuplicateCartLineError(
                "Cart already has a line for this product and recipe"
            ) from exc
        line.id = row.id

    def save(self, line: CartLine) -> None:
        row = self._session.get(CartLineRow, line.id)
        if row is None:
            return
        row.quantity = line.quantity
        row.unit_price = line.unit_price.amount
        row.currency = line.unit_price.currency
        row.sku = line.sku
        self._session.flush()

    def delete(self, line_id: int) -> None:
        row = self._session.get(CartLineRow, line_id)
        if row is not None:
            self._session.delete(row)
            self._session.flush()

    def delete_for_user(self, user_id: str) -> int:
        result = self._session.execute(
            delete(CartLineRow)
            .where(CartLineRow.user_id == user_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def recipe_in_use(self, recipe_id: int) -> bool:
        return bool(
            self._session.scalar(
                select(exists().where(CartLineRow.recipe_id == recipe_id))
            )
        )


def _to_domain(row: CartLineRow) -> CartLine:
    return CartLine(
        id=row.id,
        user_id=row.user_id,
        recipe_id=row.recipe_id,
        quantity=row.quantity,
        sku=row.sku,
        product_id=row.product_id,
        unit_price=Money.of(row.unit_price, row.currency),
        created_at=row.created_at,
    )
