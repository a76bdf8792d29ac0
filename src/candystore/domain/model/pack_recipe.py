"""PackRecipe aggregate: a named mix of flavors that fills one 3-pack.

Recipes are read far more often than they are written: every cart
mutation and availability check loads one, while only admins create or
edit them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from candystore.domain.exceptions import InvalidCompositionError, ValidationError

PACK_SIZE = 3


@dataclass(frozen=True)
class RecipeItem:
    """How many units of one flavor go into a single pack."""

    flavor_id: int
    flavor_name: str
    quantity: int

    def __post_init__(self) -> None:
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValidationError("Recipe item quantity must be an integer")
        if self.quantity < 1:
            raise ValidationError(
                f"Recipe item quantity for {self.flavor_name} must be at least 1"
            )


@dataclass(frozen=True)
class StockRequirement:
    """Units of a flavor needed to cover some number of packs."""

    flavor_id: int
    flavor_name: str
    units: int


@dataclass
class PackRecipe:
    """Aggregate root for 3-pack bundles.

    Use ``PackRecipe.create()`` for new recipes; it enforces the
    sum-to-pack-size rule. ``__init__`` stays permissive so repositories
    can reconstitute rows without re-validating, which is why the cart
    flow re-checks ``is_valid_composition`` before reserving.
    """

    id: int | None
    title: str
    kind: str
    items: list[RecipeItem] = field(default_factory=list)
    active: bool = True

    @staticmethod
    def create(
        title: str,
        kind: str,
        items: list[RecipeItem],
        active: bool = True,
    ) -> PackRecipe:
        if not title or not title.strip():
            raise ValidationError("Recipe title is required")
        if not kind or not kind.strip():
            raise ValidationError("Recipe kind is required")
        recipe = PackRecipe(
            id=None, title=title.strip(), kind=kind.strip(), active=bool(active)
        )
        recipe.replace_items(items)
        return recipe

    def replace_items(self, items: list[RecipeItem]) -> None:
        if not items:
            raise InvalidCompositionError("Recipe must contain at least one flavor")
        seen: set[int] = set()
        for item in items:
            if item.flavor_id in seen:
                raise InvalidCompositionError(
                    f"Flavor {item.flavor_name} appears more than once in the recipe"
                )
            seen.add(item.flavor_id)
        total = sum(item.quantity for item in items)
        if total != PACK_SIZE:
            raise InvalidCompositionError(
                f"Invalid recipe: total items is {total}, must be {PACK_SIZE}"
            )
        self.items = list(items)

    @property
    def total_units(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_valid_composition(self) -> bool:
        return self.total_units == PACK_SIZE

    @property
    def flavor_ids(self) -> list[int]:
        return [item.flavor_id for item in self.items]

    def requirements(self, packs: int) -> list[StockRequirement]:
        """Per-flavor units needed for *packs* packs, in recipe order."""
        return [
            StockRequirement(item.flavor_id, item.flavor_name, item.quantity * packs)
            for item in self.items
        ]
