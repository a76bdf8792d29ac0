"""Integration tests for pack recipe administration and the product view."""

from decimal import Decimal

import pytest

from candystore.application.add_to_cart import AddToCartHandler
from candystore.application.create_pack_recipe import CreatePackRecipeHandler
from candystore.application.delete_pack_recipe import DeletePackRecipeHandler
from candystore.application.dto import RecipeItemSpec
from candystore.application.show_three_pack import ShowThreePackHandler
from candystore.application.update_pack_recipe import UpdatePackRecipeHandler
from candystore.domain.exceptions import (
    FlavorNotFoundError,
    InvalidCompositionError,
    InvalidRecipeError,
    RecipeInUseError,
    ValidationError,
)
from candystore.domain.model.cart import UserIdentity
from tests.fakes import INACTIVE, RED_TWIST, SOUR, TRADITIONAL, seeded_uow


class TestCreatePackRecipe:

    def test_creates_recipe_from_names_and_aliases(self):
        uow = seeded_uow()

        dto = CreatePackRecipeHandler(uow).handle(
            "Red & Cherry",
            "Sweet",
            [RecipeItemSpec("red", 2), RecipeItemSpec("Cherry", 1)],
        )

        assert dto.id is not None
        assert dto.sku == "3P-SWE-REDx2-CHE"
        assert [(i.flavor_id, i.quantity) for i in dto.items] == [(RED_TWIST, 2), (2, 1)]
        assert uow.recipes.get_by_id(dto.id).title == "Red & Cherry"

    def test_items_must_sum_to_three(self):
        uow = seeded_uow()
        with pytest.raises(InvalidCompositionError, match="total items is 4, must be 3"):
            CreatePackRecipeHandler(uow).handle(
                "Too Many", "Sweet", [RecipeItemSpec("Cherry", 2), RecipeItemSpec("Watermelon", 2)]
            )

    def test_repeated_flavor_rejected(self):
        uow = seeded_uow()
        with pytest.raises(InvalidCompositionError, match="more than once"):
            CreatePackRecipeHandler(uow).handle(
                "Echo", "Sweet", [RecipeItemSpec("Red Twist", 1), RecipeItemSpec("Red", 2)]
            )

    def test_unknown_flavor(self):
        uow = seeded_uow()
        with pytest.raises(FlavorNotFoundError, match="Blue Raspberry"):
            CreatePackRecipeHandler(uow).handle(
                "Blue", "Sweet", [RecipeItemSpec("Blue Raspberry", 3)]
            )

    def test_title_required(self):
        uow = seeded_uow()
        with pytest.raises(ValidationError, match="title is required"):
            CreatePackRecipeHandler(uow).handle(" ", "Sweet", [RecipeItemSpec("Cherry", 3)])


class TestUpdatePackRecipe:

    def test_partial_update(self):
        uow = seeded_uow()

        dto = UpdatePackRecipeHandler(uow).handle(INACTIVE, title="Back Again", active=True)

        assert dto.title == "Back Again"
        assert dto.active is True
        assert dto.kind == "Sweet"

    def test_replace_items(self):
        uow = seeded_uow()
        dto = UpdatePackRecipeHandler(uow).handle(
            TRADITIONAL, items=[RecipeItemSpec("Watermelon", 3)]
        )
        assert dto.sku == "3P-TRD-WATx3"

    def test_items_locked_while_in_a_cart(self):
        uow = seeded_uow()
        AddToCartHandler(uow).handle(UserIdentity("alice"), "3-pack", TRADITIONAL, 1)

        with pytest.raises(RecipeInUseError):
            UpdatePackRecipeHandler(uow).handle(
                TRADITIONAL, items=[RecipeItemSpec("Watermelon", 3)]
            )
        assert uow.recipes.get_by_id(TRADITIONAL).flavor_ids == [RED_TWIST]

    def test_title_can_change_while_in_a_cart(self):
        uow = seeded_uow()
        AddToCartHandler(uow).handle(UserIdentity("alice"), "3-pack", TRADITIONAL, 1)
        dto = UpdatePackRecipeHandler(uow).handle(TRADITIONAL, title="Classic")
        assert dto.title == "Classic"

    def test_unknown_recipe(self):
        uow = seeded_uow()
        with pytest.raises(InvalidRecipeError):
            UpdatePackRecipeHandler(uow).handle(404, title="Nope")


class TestDeletePackRecipe:

    def test_delete(self):
        uow = seeded_uow()
        DeletePackRecipeHandler(uow).handle(INACTIVE)
        assert uow.recipes.get_by_id(INACTIVE) is None

    def test_recipe_in_cart_cannot_be_deleted(self):
        uow = seeded_uow()
        AddToCartHandler(uow).handle(UserIdentity("alice"), "3-pack", SOUR, 1)
        with pytest.raises(RecipeInUseError, match="in a cart"):
            DeletePackRecipeHandler(uow).handle(SOUR)

    def test_unknown_recipe(self):
        uow = seeded_uow()
        with pytest.raises(InvalidRecipeError):
            DeletePackRecipeHandler(uow).handle(404)


class TestShowThreePack:

    def test_product_lists_active_variants(self):
        uow = seeded_uow()

        product = ShowThreePackHandler(uow).handle()

        assert product.id == "3-pack"
        assert product.title == "Candy 3-Pack"
        assert product.price == Decimal("27.00")
        assert product.currency == "USD"
        assert {v.id for v in product.variants} == {TRADITIONAL, SOUR}

    def test_admin_listing_includes_inactive(self):
        uow = seeded_uow()
        recipes = ShowThreePackHandler(uow).list_recipes()
        assert {r.id for r in recipes} == {TRADITIONAL, SOUR, INACTIVE}

    def test_show_recipe(self):
        uow = seeded_uow()
        recipe = ShowThreePackHandler(uow).show_recipe(SOUR)
        assert recipe.sku == "3P-SOR-WAT-CHE-BERDEL"

    def test_show_unknown_recipe(self):
        uow = seeded_uow()
        with pytest.raises(InvalidRecipeError):
            ShowThreePackHandler(uow).show_recipe(404)
