"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI/HTTP boundaries and the application layer
without exposing domain internals to the outside world. Money is carried
as Decimal; each boundary formats it its own way.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from candystore.domain.model.cart import CartLine
from candystore.domain.model.inventory import InventoryRecord
from candystore.domain.model.pack_recipe import PackRecipe


@dataclass(frozen=True)
class PackItemDTO:
    flavor_id: int
    flavor_name: str
    quantity: int


@dataclass(frozen=True)
class CartLineDTO:
    """Output: one 3-pack line with its computed total and SKU."""

    id: int
    product_id: str
    recipe_id: int
    recipe_title: str
    recipe_kind: str
    quantity: int
    unit_price: Decimal
    total: Decimal
    sku: str
    items: list[PackItemDTO] = field(default_factory=list)


@dataclass(frozen=True)
class CartDTO:
    lines: list[CartLineDTO]
    total_items: int
    cart_total: Decimal


@dataclass(frozen=True)
class ClearCartResultDTO:
    lines_removed: int
    release_failures: int


@dataclass(frozen=True)
class FlavorAvailabilityDTO:
    """Output: one recipe item checked against its flavor's stock."""

    flavor_id: int
    flavor_name: str
    required: int
    available: int
    on_hand: int
    reserved: int
    safety_stock: int
    available_after_safety: int


@dataclass(frozen=True)
class LimitingFactorDTO:
    flavor_name: str
    available: int  # after safety stock
    required: int


@dataclass(frozen=True)
class AvailabilityDTO:
    recipe_id: int
    requested_qty: int
    is_purchasable: bool
    limiting_factor: LimitingFactorDTO | None
    availability: list[FlavorAvailabilityDTO]


@dataclass(frozen=True)
class InventoryLineDTO:
    flavor_id: int
    flavor_name: str
    on_hand: int
    reserved: int
    safety_stock: int
    available: int
    available_after_safety: int


@dataclass(frozen=True)
class LowStockAlertDTO:
    flavor_id: int
    flavor_name: str
    on_hand: int
    reserved: int
    safety_stock: int
    available: int
    available_after_safety: int
    alert_type: str  # out_of_stock | low_stock | normal
    severity: str  # critical | warning | info


@dataclass(frozen=True)
class LowStockReportDTO:
    threshold: int
    alerts: list[LowStockAlertDTO]

    @property
    def total_alerts(self) -> int:
        return len(self.alerts)

    @property
    def critical_alerts(self) -> int:
        return sum(1 for a in self.alerts if a.severity == "critical")

    @property
    def warning_alerts(self) -> int:
        return sum(1 for a in self.alerts if a.severity == "warning")


@dataclass(frozen=True)
class LevelUpdateSpec:
    """Input: one entry of a bulk inventory update."""

    flavor_id: int | None
    on_hand: int | None = None
    safety_stock: int | None = None


@dataclass(frozen=True)
class LevelUpdateResultDTO:
    flavor_id: int | None
    success: bool
    inventory: InventoryLineDTO | None = None
    error: str | None = None


@dataclass(frozen=True)
class FlavorDTO:
    id: int
    name: str
    aliases: list[str]
    active: bool
    inventory: InventoryLineDTO | None = None


@dataclass(frozen=True)
class RecipeItemSpec:
    """Input: flavor (name or alias) and units per pack."""

    flavor_name: str
    quantity: int


@dataclass(frozen=True)
class RecipeDTO:
    id: int
    title: str
    kind: str
    active: bool
    sku: str
    items: list[PackItemDTO]


@dataclass(frozen=True)
class ThreePackProductDTO:
    id: str
    title: str
    price: Decimal
    currency: str
    variants: list[RecipeDTO]


@dataclass(frozen=True)
class OrderLineItemDTO:
    recipe_id: int
    recipe_title: str
    sku: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


@dataclass(frozen=True)
class OrderDTO:
    id: int
    user_id: str
    status: str
    items: list[OrderLineItemDTO]
    total: Decimal
    created_at: str
    shipping_address: str | None = None
    notes: str | None = None


# --- Mapping helpers --------------------------------------------------------


def pack_items(recipe: PackRecipe) -> list[PackItemDTO]:
    return [
        PackItemDTO(item.flavor_id, item.flavor_name, item.quantity)
        for item in recipe.items
    ]


def cart_line_dto(line: CartLine, recipe: PackRecipe) -> CartLineDTO:
    return CartLineDTO(
        id=line.id,  # type: ignore[arg-type]
        product_id=line.product_id,
        recipe_id=line.recipe_id,
        recipe_title=recipe.title,
        recipe_kind=recipe.kind,
        quantity=line.quantity,
        unit_price=line.unit_price.amount,
        total=line.line_total.amount,
        sku=line.sku,
        items=pack_items(recipe),
    )


def inventory_line_dto(record: InventoryRecord) -> InventoryLineDTO:
    return InventoryLineDTO(
        flavor_id=record.flavor_id,
        flavor_name=record.flavor_name,
        on_hand=record.on_hand,
        reserved=record.reserved,
        safety_stock=record.safety_stock,
        available=record.available,
        available_after_safety=record.available_after_safety,
    )
