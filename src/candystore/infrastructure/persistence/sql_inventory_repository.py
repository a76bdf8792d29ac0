"""SQLAlchemy-backed implementation of InventoryRepository.

Reservation counters are only ever changed with conditional UPDATE
statements, so the database itself refuses an increment that would eat
into safety stock, even if a caller skipped the lock.
"""

from __future__ import annotations

from sqlalchemy import case, delete, select, update
from sqlalchemy.orm import Session

from candystore.domain.model.inventory import InventoryRecord
from candystore.domain.repository.inventory_repository import InventoryRepository
from candystore.infrastructure.persistence.orm import FlavorInventoryRow, FlavorRow


class SqlInventoryRepository(InventoryRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- InventoryRepository interface ----------------------------------------

    def get_by_flavor_id(self, flavor_id: int) -> InventoryRecord | None:
        row = self._session.execute(
            self._select().where(FlavorInventoryRow.flavor_id == flavor_id)
        ).first()
        return _to_domain(*row) if row is not None else None

    def list_all(self) -> list[InventoryRecord]:
        rows = self._session.execute(self._select().order_by(FlavorRow.name))
        return [_to_domain(inv, name) for inv, name in rows]

    def lock(self, flavor_ids: list[int]) -> dict[int, InventoryRecord]:
        if not flavor_ids:
            return {}
        stmt = (
            self._select()
            .where(FlavorInventoryRow.flavor_id.in_(sorted(set(flavor_ids))))
            .order_by(FlavorInventoryRow.flavor_id)
            .with_for_update(of=FlavorInventoryRow)
        )
        return {
            inv.flavor_id: _to_domain(inv, name)
            for inv, name in self._session.execute(stmt)
        }

    def add(self, record: InventoryRecord) -> None:
        self._session.add(
            FlavorInventoryRow(
                flavor_id=record.flavor_id,
                on_hand=record.on_hand,
                reserved=record.reserved,
                safety_stock=record.safety_stock,
            )
        )
        self._session.flush()

    def save(self, record: InventoryRecord) -> None:
        self._session.execute(
            update(FlavorInventoryRow)
            .where(FlavorInventoryRow.flavor_id == record.flavor_id)
            .values(on_hand=record.on_hand, safety_stock=record.safety_stock)
            .execution_options(synchronize_session=False)
        )

    def delete(self, flavor_id: int) -> None:
        self._session.execute(
            delete(FlavorInventoryRow)
            .where(FlavorInventoryRow.flavor_id == flavor_id)
            .execution_options(synchronize_session=False)
        )

    def increment_reserved(self, flavor_id: int, units: int) -> bool:
        inv = FlavorInventoryRow
        result = self._session.execute(
            update(inv)
            .where(inv.flavor_id == flavor_id)
            .where(inv.on_hand - inv.reserved - inv.safety_stock >= units)
            .values(reserved=inv.reserved + units)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def decrement_reserved(self, flavor_id: int, units: int) -> None:
        inv = FlavorInventoryRow
        self._session.execute(
            update(inv)
            .where(inv.flavor_id == flavor_id)
            .values(reserved=_floored(inv.reserved - units))
            .execution_options(synchronize_session=False)
        )

    def consume(self, flavor_id: int, units: int) -> bool:
        inv = FlavorInventoryRow
        result = self._session.execute(
            update(inv)
            .where(inv.flavor_id == flavor_id)
            .where(inv.on_hand >= units)
            .values(
                on_hand=inv.on_hand - units,
                reserved=_floored(inv.reserved - units),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _select():
        return (
            select(FlavorInventoryRow, FlavorRow.name)
            .join(FlavorRow, FlavorRow.id == FlavorInventoryRow.flavor_id)
            .execution_options(populate_existing=True)
        )


def _floored(expr):
    return case((expr < 0, 0), else_=expr)


def _to_domain(row: FlavorInventoryRow, flavor_name: str) -> InventoryRecord:
    return InventoryRecord(
        flavor_id=row.flavor_id,
        flavor_name=flavor_name,
        on_hand=row.on_hand,
        reserved=row.reserved,
        safety_stock=row.safety_stock,
    )
