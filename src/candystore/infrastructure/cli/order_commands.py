"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from candystore.application.checkout import CheckoutHandler
from candystore.application.dto import OrderDTO
from candystore.application.show_order import ListOrdersHandler, ShowOrderHandler
from candystore.domain.exceptions import DomainException
from candystore.domain.model.cart import UserIdentity
from candystore.infrastructure.bootstrap import unit_of_work


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"User:     {dto.user_id}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.shipping_address:
        click.echo(f"Ship to:  {dto.shipping_address}")
    click.echo()
    click.echo(f"  {'Recipe':<24} {'Qty':>5} {'Price':>10} {'Total':>10}  SKU")
    click.echo(f"  {'-'*72}")
    for item in dto.items:
        click.echo(
            f"  {item.recipe_title:<24} {item.quantity:>5} "
            f"{item.unit_price:>10.2f} {item.line_total:>10.2f}  {item.sku}"
        )
    click.echo(f"  {'-'*72}")
    click.echo(f"  {'Order Total':<30} {dto.total:>10.2f}")


@click.command("checkout")
@click.option("--user", "user_id", required=True, help="Shopper ID.")
@click.option("--address", default=None, help="Shipping address.")
@click.option("--notes", default=None, help="Order notes.")
def order_checkout(user_id: str, address: str | None, notes: str | None) -> None:
    """Turn the cart into an order (consumes reserved stock)."""
    handler = CheckoutHandler(unit_of_work())

    try:
        dto = handler.handle(UserIdentity(user_id), shipping_address=address, notes=notes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    try:
        dto = ShowOrderHandler(unit_of_work()).handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--user", "user_id", required=True, help="Shopper ID.")
def order_list(user_id: str) -> None:
    """List a shopper's orders, newest first."""
    orders = ListOrdersHandler(unit_of_work()).handle(UserIdentity(user_id))

    if not orders:
        click.echo("No orders found.")
        return

    for o in orders:
        click.echo(f"#{o.id:<6} {o.status:<10} {len(o.items):>3} item(s)  {o.total:>10.2f}  {o.created_at}")
