"""3-pack product, cart and availability routes."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query, status

from candystore.application.add_to_cart import AddToCartHandler
from candystore.application.check_availability import CheckAvailabilityHandler
from candystore.application.clear_cart import ClearCartHandler
from candystore.application.list_flavors import ListFlavorsHandler
from candystore.application.remove_cart_line import RemoveCartLineHandler
from candystore.application.show_cart import ShowCartHandler
from candystore.application.show_three_pack import ShowThreePackHandler
from candystore.application.update_cart_line import UpdateCartLineHandler
from candystore.infrastructure.api.dependencies import CurrentUser, Uow
from candystore.infrastructure.api.schemas import (
    AddToCartRequest,
    AvailabilityResponse,
    CartLineEnvelope,
    CartLineResponse,
    CartResponse,
    FlavorResponse,
    MessageResponse,
    ThreePackProductResponse,
    UpdateCartLineRequest,
)

router = APIRouter(prefix="/api/3pack", tags=["3-pack"])


@router.get("/product", response_model=ThreePackProductResponse)
def get_three_pack_product(uow: Uow):
    """The 3-pack product with every active recipe as a variant."""
    return ThreePackProductResponse.from_dto(ShowThreePackHandler(uow).handle())


@router.get("/availability", response_model=AvailabilityResponse)
def get_availability(
    uow: Uow,
    recipe_id: Optional[int] = Query(None),
    qty: str = Query("1"),
):
    """Can a recipe be bought *qty* times right now? Never reserves."""
    dto = CheckAvailabilityHandler(uow).handle(recipe_id, qty)
    return AvailabilityResponse.from_dto(dto)


@router.get("/flavors", response_model=List[FlavorResponse])
def list_flavors(uow: Uow):
    return [FlavorResponse.from_dto(f) for f in ListFlavorsHandler(uow).handle()]


@router.get("/cart", response_model=CartResponse)
def get_cart(uow: Uow, user: CurrentUser):
    return CartResponse.from_dto(ShowCartHandler(uow).handle(user))


@router.post("/cart", response_model=CartLineEnvelope, status_code=status.HTTP_201_CREATED)
def add_to_cart(body: AddToCartRequest, uow: Uow, user: CurrentUser):
    line = AddToCartHandler(uow).handle(user, body.product_id, body.recipe_id, body.qty)
    return CartLineEnvelope(message="Added to cart", cartLine=CartLineResponse.from_dto(line))


@router.put("/cart/{line_id}", response_model=CartLineEnvelope)
def update_cart_line(line_id: int, body: UpdateCartLineRequest, uow: Uow, user: CurrentUser):
    line = UpdateCartLineHandler(uow).handle(user, line_id, body.qty)
    return CartLineEnvelope(
        message="Cart line updated successfully",
        cartLine=CartLineResponse.from_dto(line),
    )


@router.delete("/cart/{line_id}", response_model=MessageResponse)
def remove_cart_line(line_id: int, uow: Uow, user: CurrentUser):
    RemoveCartLineHandler(uow).handle(user, line_id)
    return MessageResponse(message="Cart line removed successfully")


@router.delete("/cart", response_model=MessageResponse)
def clear_cart(uow: Uow, user: CurrentUser):
    ClearCartHandler(uow).handle(user)
    return MessageResponse(message="Cart cleared successfully")
