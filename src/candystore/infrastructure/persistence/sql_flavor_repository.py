"""SQLAlchemy-backed implementation of FlavorRepository."""

from __future__ import annotations

from sqlalchemy import delete, exists, func, select
from sqlalchemy.orm import Session

from candystore.domain.model.flavor import Flavor
from candystore.domain.repository.flavor_repository import FlavorRepository
from candystore.infrastructure.persistence.orm import FlavorRow, PackRecipeItemRow


class SqlFlavorRepository(FlavorRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- FlavorRepository interface -------------------------------------------

    def get_by_id(self, flavor_id: int) -> Flavor | None:
        row = self._session.get(FlavorRow, flavor_id)
        return _to_domain(row) if row is not None else None

    def get_by_name(self, name: str) -> Flavor | None:
        needle = name.strip().lower()
        if not needle:
            return None
        row = self._session.scalars(
            select(FlavorRow).where(func.lower(FlavorRow.name) == needle)
        ).first()
        if row is not None:
            return _to_domain(row)
        # Aliases live in a JSON column; the table is small enough to scan
        for flavor in self.list_all():
            if flavor.matches(needle):
                return flavor
        return None

    def list_all(self) -> list[Flavor]:
        rows = self._session.scalars(select(FlavorRow).order_by(FlavorRow.name))
        return [_to_domain(row) for row in rows]

    def add(self, flavor: Flavor) -> None:
        row = FlavorRow(
            name=flavor.name,
            aliases=sorted(flavor.aliases),
            active=flavor.active,
        )
        self._session.add(row)
        self._session.flush()
        flavor.id = row.id

    def save(self, flavor: Flavor) -> None:
        row = self._session.get(FlavorRow, flavor.id)
        if row is None:
            return
        row.name = flavor.name
        row.aliases = sorted(flavor.aliases)
        row.active = flavor.active
        self._session.flush()

    def delete(self, flavor_id: int) -> None:
        self._session.execute(delete(FlavorRow).where(FlavorRow.id == flavor_id))

    def is_referenced(self, flavor_id: int) -> bool:
        return bool(
            self._session.scalar(
                select(exists().where(PackRecipeItemRow.flavor_id == flavor_id))
            )
        )


def _to_domain(row: FlavorRow) -> Flavor:
    return Flavor(
        id=row.id,
        name=row.name,
        aliases=frozenset(row.aliases or []),
        active=row.active,
    )
