"""CLI commands for a shopper's 3-pack cart.

The CLI has no login; ``--user`` stands in for the authenticated caller.
"""

from __future__ import annotations

import click

from candystore.application.add_to_cart import AddToCartHandler
from candystore.application.clear_cart import ClearCartHandler
from candystore.application.dto import CartLineDTO
from candystore.application.remove_cart_line import RemoveCartLineHandler
from candystore.application.show_cart import ShowCartHandler
from candystore.application.update_cart_line import UpdateCartLineHandler
from candystore.domain.exceptions import DomainException
from candystore.domain.model.cart import THREE_PACK_PRODUCT_ID, UserIdentity
from candystore.infrastructure.bootstrap import unit_of_work

user_option = click.option("--user", "user_id", required=True, help="Shopper ID.")


def _line_summary(line: CartLineDTO) -> str:
    return (
        f"Line #{line.id}: {line.quantity} x '{line.recipe_title}' "
        f"@ ${line.unit_price:.2f} = ${line.total:.2f}  (sku={line.sku})"
    )


@click.command("add")
@user_option
@click.option("--recipe", "recipe_id", required=True, type=int, help="Recipe ID.")
@click.option("--qty", required=True, help="Number of packs.")
@click.option("--product", "product_id", default=THREE_PACK_PRODUCT_ID, show_default=True)
def cart_add(user_id: str, recipe_id: int, qty: str, product_id: str) -> None:
    """Add packs of a recipe to the cart (reserves stock)."""
    handler = AddToCartHandler(unit_of_work())

    try:
        line = handler.handle(UserIdentity(user_id), product_id, recipe_id, qty)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Added to cart")
    click.echo(_line_summary(line))


@click.command("update")
@user_option
@click.option("--line", "line_id", required=True, type=int, help="Cart line ID.")
@click.option("--qty", required=True, help="New number of packs.")
def cart_update(user_id: str, line_id: int, qty: str) -> None:
    """Change the pack count of a cart line."""
    handler = UpdateCartLineHandler(unit_of_work())

    try:
        line = handler.handle(UserIdentity(user_id), line_id, qty)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(_line_summary(line))


@click.command("remove")
@user_option
@click.option("--line", "line_id", required=True, type=int, help="Cart line ID.")
def cart_remove(user_id: str, line_id: int) -> None:
    """Remove a cart line (releases its stock)."""
    try:
        RemoveCartLineHandler(unit_of_work()).handle(UserIdentity(user_id), line_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart line #{line_id} removed")


@click.command("clear")
@user_option
def cart_clear(user_id: str) -> None:
    """Empty the cart (releases all of its stock)."""
    result = ClearCartHandler(unit_of_work()).handle(UserIdentity(user_id))

    click.echo(f"Cart cleared ({result.lines_removed} line(s) removed)")
    if result.release_failures:
        click.echo(
            f"Warning: {result.release_failures} release(s) failed; see the log",
            err=True,
        )


@click.command("show")
@user_option
def cart_show(user_id: str) -> None:
    """Show the cart, newest line first."""
    cart = ShowCartHandler(unit_of_work()).handle(UserIdentity(user_id))

    if not cart.lines:
        click.echo("Cart is empty.")
        return

    click.echo(f"  {'Line':<6} {'Recipe':<24} {'Qty':>5} {'Price':>9} {'Total':>10}  SKU")
    click.echo(f"  {'-'*72}")
    for line in cart.lines:
        click.echo(
            f"  {line.id:<6} {line.recipe_title:<24} {line.quantity:>5} "
            f"{line.unit_price:>9.2f} {line.total:>10.2f}  {line.sku}"
        )
    click.echo(f"  {'-'*72}")
    click.echo(f"  {cart.total_items} line(s)  Cart total: ${cart.cart_total:.2f}")
