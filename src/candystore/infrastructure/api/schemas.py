"""Request and response schemas for the 3-pack HTTP API.

Response models are built from application DTOs; money goes out as a
JSON number with two decimals.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from candystore.application.dto import (
    AvailabilityDTO,
    CartDTO,
    CartLineDTO,
    FlavorDTO,
    ThreePackProductDTO,
)

# Loosely typed; the handlers own the "qty must be a positive
# integer" message.
RawQuantity = Union[int, float, str, None]


def _money(amount: Decimal) -> float:
    return float(amount.quantize(Decimal("0.01")))


# --- Requests -----------------------------------------------------------------


class AddToCartRequest(BaseModel):
    """Add-to-cart body."""

    product_id: Optional[str] = None
    recipe_id: Optional[int] = None
    qty: RawQuantity = None


class UpdateCartLineRequest(BaseModel):
    """Update-line body."""

    qty: RawQuantity = None


# --- Responses ----------------------------------------------------------------


class MessageResponse(BaseModel):
    message: str


class PackItemResponse(BaseModel):
    flavor_id: int
    flavor_name: str
    quantity: int


class CartLineResponse(BaseModel):
    id: int
    product_id: str
    recipe_id: int
    recipe_title: str
    recipe_kind: str
    quantity: int
    unit_price: float
    total: float
    sku: str
    items: List[PackItemResponse] = Field(default_factory=list)

    @classmethod
    def from_dto(cls, dto: CartLineDTO) -> CartLineResponse:
        return cls(
            id=dto.id,
            product_id=dto.product_id,
            recipe_id=dto.recipe_id,
            recipe_title=dto.recipe_title,
            recipe_kind=dto.recipe_kind,
            quantity=dto.quantity,
            unit_price=_money(dto.unit_price),
            total=_money(dto.total),
            sku=dto.sku,
            items=[
                PackItemResponse(
                    flavor_id=i.flavor_id, flavor_name=i.flavor_name, quantity=i.quantity
                )
                for i in dto.items
            ],
        )


class CartLineEnvelope(BaseModel):
    message: str
    cartLine: CartLineResponse


class CartResponse(BaseModel):
    cart: List[CartLineResponse]
    total_items: int
    cart_total: float

    @classmethod
    def from_dto(cls, dto: CartDTO) -> CartResponse:
        return cls(
            cart=[CartLineResponse.from_dto(line) for line in dto.lines],
            total_items=dto.total_items,
            cart_total=_money(dto.cart_total),
        )


class VariantItemResponse(BaseModel):
    flavor_id: int
    flavor_name: str
    qty: int


class VariantResponse(BaseModel):
    id: int
    title: str
    kind: str
    items: List[VariantItemResponse]
    active: bool
    sku: str


class ThreePackProductResponse(BaseModel):
    id: str
    title: str
    price: float
    currency: str
    tax_code: str = "candy"
    options_ui: str = "cards"
    variants: List[VariantResponse]

    @classmethod
    def from_dto(cls, dto: ThreePackProductDTO) -> ThreePackProductResponse:
        return cls(
            id=dto.id,
            title=dto.title,
            price=_money(dto.price),
            currency=dto.currency,
            variants=[
                VariantResponse(
                    id=v.id,
                    title=v.title,
                    kind=v.kind,
                    active=v.active,
                    sku=v.sku,
                    items=[
                        VariantItemResponse(
                            flavor_id=i.flavor_id, flavor_name=i.flavor_name, qty=i.quantity
                        )
                        for i in v.items
                    ],
                )
                for v in dto.variants
            ],
        )


class FlavorAvailabilityResponse(BaseModel):
    flavor_id: int
    flavor_name: str
    required: int
    available: int
    on_hand: int
    reserved: int
    safety_stock: int
    available_after_safety: int

    model_config = {"from_attributes": True}


class LimitingFactorResponse(BaseModel):
    flavor_name: str
    available: int
    required: int

    model_config = {"from_attributes": True}


class AvailabilityResponse(BaseModel):
    recipe_id: int
    requested_qty: int
    is_purchasable: bool
    limiting_factor: Optional[LimitingFactorResponse] = None
    availability: List[FlavorAvailabilityResponse]

    model_config = {"from_attributes": True}

    @classmethod
    def from_dto(cls, dto: AvailabilityDTO) -> AvailabilityResponse:
        return cls.model_validate(dto)


class InventoryResponse(BaseModel):
    on_hand: int
    reserved: int
    safety_stock: int
    available: int
    available_after_safety: int

    model_config = {"from_attributes": True}


class FlavorResponse(BaseModel):
    id: int
    name: str
    aliases: List[str]
    active: bool
    inventory: Optional[InventoryResponse] = None

    model_config = {"from_attributes": True}

    @classmethod
    def from_dto(cls, dto: FlavorDTO) -> FlavorResponse:
        return cls.model_validate(dto)
