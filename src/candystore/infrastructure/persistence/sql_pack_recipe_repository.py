"""SQLAlchemy-backed implementation of PackRecipeRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from candystore.domain.model.pack_recipe import PackRecipe, RecipeItem
from candystore.domain.repository.pack_recipe_repository import PackRecipeRepository
from candystore.infrastructure.persistence.orm import PackRecipeItemRow, PackRecipeRow


class SqlPackRecipeRepository(PackRecipeRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- PackRecipeRepository interface ---------------------------------------

    def get_by_id(self, recipe_id: int) -> PackRecipe | None:
        row = self._session.scalars(
            self._select().where(PackRecipeRow.id == recipe_id)
        ).first()
        return _to_domain(row) if row is not None else None

    def list_all(self, active_only: bool = False) -> list[PackRecipe]:
        stmt = self._select().order_by(PackRecipeRow.kind, PackRecipeRow.title)
        if active_only:
            stmt = stmt.where(PackRecipeRow.active.is_(True))
        return [_to_domain(row) for row in self._session.scalars(stmt)]

    def add(self, recipe: PackRecipe) -> None:
        row = PackRecipeRow(
            title=recipe.title,
            kind=recipe.kind,
            active=recipe.active,
            items=_item_rows(recipe),
        )
        self._session.add(row)
        self._session.flush()
        recipe.id = row.id

    def save(self, recipe: PackRecipe) -> None:
        row = self._session.get(PackRecipeRow, recipe.id)
        if row is None:
            return
        row.title = recipe.title
        row.kind = recipe.kind
        row.active = recipe.active
        current = [(item.flavor_id, item.quantity) for item in row.items]
        wanted = [(item.flavor_id, item.quantity) for item in recipe.items]
        if current != wanted:
            # Flush the removals first so the (recipe, flavor) unique
            # constraint never sees old and new rows together
            row.items.clear()
            self._session.flush()
            row.items.extend(_item_rows(recipe))
        self._session.flush()

    def delete(self, recipe_id: int) -> None:
        row = self._session.get(PackRecipeRow, recipe_id)
        if row is not None:
            self._session.delete(row)
            self._session.flush()

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _select():
        return select(PackRecipeRow).options(
            selectinload(PackRecipeRow.items).joinedload(PackRecipeItemRow.flavor)
        )


def _item_rows(recipe: PackRecipe) -> list[PackRecipeItemRow]:
    return [
        PackRecipeItemRow(flavor_id=item.flavor_id, quantity=item.quantity, position=pos)
        for pos, item in enumerate(recipe.items)
    ]


def _to_domain(row: PackRecipeRow) -> PackRecipe:
    return PackRecipe(
        id=row.id,
        title=row.title,
        kind=row.kind,
        active=row.active,
        items=[
            RecipeItem(
                flavor_id=item.flavor_id,
                flavor_name=item.flavor.name,
                quantity=item.quantity,
            )
            for item in row.items
        ],
    )
