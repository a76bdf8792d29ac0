"""CLI commands for pack recipes and the 3-pack product."""

from __future__ import annotations

import click

from candystore.application.check_availability import CheckAvailabilityHandler
from candystore.application.create_pack_recipe import CreatePackRecipeHandler
from candystore.application.delete_pack_recipe import DeletePackRecipeHandler
from candystore.application.dto import RecipeDTO, RecipeItemSpec
from candystore.application.show_three_pack import ShowThreePackHandler
from candystore.application.update_pack_recipe import UpdatePackRecipeHandler
from candystore.domain.exceptions import DomainException
from candystore.infrastructure.bootstrap import unit_of_work


def _parse_items(raw: str) -> list[RecipeItemSpec]:
    """Parse 'Red Twist:2,Cherry:1' into RecipeItemSpec list."""
    specs: list[RecipeItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'Flavor:Quantity'."
            )
        name, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for flavor '{name}'."
            )
        specs.append(RecipeItemSpec(flavor_name=name.strip(), quantity=qty))
    return specs


def _display_recipe(dto: RecipeDTO) -> None:
    status = "active" if dto.active else "inactive"
    click.echo(f"Recipe #{dto.id} '{dto.title}'  (kind={dto.kind}, {status})")
    click.echo(f"SKU: {dto.sku}")
    click.echo()
    click.echo(f"  {'Flavor':<22} {'Qty':>5}")
    click.echo(f"  {'-'*28}")
    for item in dto.items:
        click.echo(f"  {item.flavor_name:<22} {item.quantity:>5}")


@click.command("create")
@click.option("--title", required=True, help="Recipe title.")
@click.option("--kind", required=True, help="Traditional, Sour, Sweet, ...")
@click.option("--items", required=True, help="Items as 'Flavor:Qty,Flavor:Qty' (sum 3).")
@click.option("--inactive", is_flag=True, default=False, help="Create the recipe inactive.")
def recipe_create(title: str, kind: str, items: str, inactive: bool) -> None:
    """Create a 3-pack recipe."""
    specs = _parse_items(items)
    handler = CreatePackRecipeHandler(unit_of_work())

    try:
        dto = handler.handle(title=title, kind=kind, items=specs, active=not inactive)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Recipe #{dto.id} '{dto.title}' created  (sku={dto.sku})")


@click.command("update")
@click.option("--id", "recipe_id", required=True, type=int, help="Recipe ID.")
@click.option("--title", default=None, help="New title.")
@click.option("--kind", default=None, help="New kind.")
@click.option("--items", default=None, help="Replacement items 'Flavor:Qty,...'.")
@click.option("--active/--inactive", default=None, help="Enable or disable the recipe.")
def recipe_update(
    recipe_id: int,
    title: str | None,
    kind: str | None,
    items: str | None,
    active: bool | None,
) -> None:
    """Edit a recipe; item changes are refused while carts hold it."""
    specs = _parse_items(items) if items else None
    handler = UpdatePackRecipeHandler(unit_of_work())

    try:
        dto = handler.handle(recipe_id, title=title, kind=kind, active=active, items=specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_recipe(dto)


@click.command("list")
def recipe_list() -> None:
    """List every recipe, inactive ones included."""
    recipes = ShowThreePackHandler(unit_of_work()).list_recipes()

    if not recipes:
        click.echo("No recipes found.")
        return

    click.echo(f"{'ID':<6} {'Title':<24} {'Kind':<12} {'Active':<7} SKU")
    click.echo("-" * 72)
    for r in recipes:
        click.echo(
            f"{r.id:<6} {r.title:<24} {r.kind:<12} {'yes' if r.active else 'no':<7} {r.sku}"
        )


@click.command("show")
@click.option("--id", "recipe_id", required=True, type=int, help="Recipe ID.")
def recipe_show(recipe_id: int) -> None:
    """Show a recipe and its flavors."""
    try:
        dto = ShowThreePackHandler(unit_of_work()).show_recipe(recipe_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_recipe(dto)


@click.command("delete")
@click.option("--id", "recipe_id", required=True, type=int, help="Recipe ID.")
def recipe_delete(recipe_id: int) -> None:
    """Delete a recipe no cart line references."""
    try:
        DeletePackRecipeHandler(unit_of_work()).handle(recipe_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Recipe #{recipe_id} deleted")


@click.command("show")
def pack_show() -> None:
    """Show the 3-pack product and its purchasable variants."""
    product = ShowThreePackHandler(unit_of_work()).handle()

    click.echo(f"{product.title}  ({product.id})  ${product.price:.2f} {product.currency}")
    if not product.variants:
        click.echo("No active variants.")
        return
    click.echo()
    for v in product.variants:
        flavors = ", ".join(f"{i.flavor_name} x{i.quantity}" for i in v.items)
        click.echo(f"  #{v.id:<4} {v.title:<24} {v.kind:<12} {v.sku:<28} {flavors}")


@click.command("availability")
@click.option("--recipe", "recipe_id", required=True, type=int, help="Recipe ID.")
@click.option("--qty", default="1", help="Number of packs.")
def pack_availability(recipe_id: int, qty: str) -> None:
    """Check whether a recipe can be bought right now (reserves nothing)."""
    try:
        dto = CheckAvailabilityHandler(unit_of_work()).handle(recipe_id, qty)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    verdict = "purchasable" if dto.is_purchasable else "NOT purchasable"
    click.echo(f"Recipe #{dto.recipe_id} x{dto.requested_qty}: {verdict}")
    if dto.limiting_factor:
        lf = dto.limiting_factor
        click.echo(
            f"Limiting flavor: {lf.flavor_name} (available {lf.available}, required {lf.required})"
        )
    click.echo()
    click.echo(f"  {'Flavor':<22} {'Required':>9} {'Sellable':>9} {'On hand':>8} {'Reserved':>9}")
    click.echo(f"  {'-'*61}")
    for d in dto.availability:
        click.echo(
            f"  {d.flavor_name:<22} {d.required:>9} {d.available_after_safety:>9} "
            f"{d.on_hand:>8} {d.reserved:>9}"
        )
