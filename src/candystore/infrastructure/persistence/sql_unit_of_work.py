"""SQLAlchemy Unit of Work.

Each ``with uow:`` block opens a fresh Session, so one request is one
transaction no matter how many repositories it touches. The same
instance can be entered again for a later request (or a retry).
"""

from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from candystore.domain.repository.unit_of_work import UnitOfWork
from candystore.infrastructure.persistence.sql_cart_repository import SqlCartRepository
from candystore.infrastructure.persistence.sql_flavor_repository import SqlFlavorRepository
from candystore.infrastructure.persistence.sql_inventory_repository import (
    SqlInventoryRepository,
)
from candystore.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from candystore.infrastructure.persistence.sql_pack_recipe_repository import (
    SqlPackRecipeRepository,
)


class SqlAlchemyUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self._session_factory()
        self.flavors = SqlFlavorRepository(self._session)
        self.inventory = SqlInventoryRepository(self._session)
        self.recipes = SqlPackRecipeRepository(self._session)
        self.carts = SqlCartRepository(self._session)
        self.orders = SqlOrderRepository(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            if self._session is not None:
                self._session.close()
                self._session = None

    def commit(self) -> None:
        self._session.commit()

    def rollback(self) -> None:
        if self._session is not None:
            self._session.rollback()
