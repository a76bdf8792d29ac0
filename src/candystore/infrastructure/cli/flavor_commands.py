"""CLI commands for the Flavor catalog."""

from __future__ import annotations

import click

from candystore.application.add_flavor import AddFlavorHandler
from candystore.application.delete_flavor import DeleteFlavorHandler
from candystore.application.list_flavors import ListFlavorsHandler
from candystore.application.update_flavor import UpdateFlavorHandler
from candystore.domain.exceptions import DomainException
from candystore.infrastructure.bootstrap import unit_of_work


def _split_aliases(raw: str | None) -> list[str] | None:
    if raw is None:
        return None
    return [alias.strip() for alias in raw.split(",") if alias.strip()]


@click.command("add")
@click.option("--name", required=True, help="Flavor name.")
@click.option("--aliases", default=None, help="Comma-separated alternate names.")
@click.option("--on-hand", default=0, type=int, help="Initial units on hand.")
@click.option("--safety-stock", default=0, type=int, help="Units never sold.")
@click.option("--inactive", is_flag=True, default=False, help="Create the flavor inactive.")
def flavor_add(
    name: str, aliases: str | None, on_hand: int, safety_stock: int, inactive: bool
) -> None:
    """Add a flavor together with its inventory record."""
    handler = AddFlavorHandler(unit_of_work())

    try:
        dto = handler.handle(
            name=name,
            aliases=_split_aliases(aliases),
            active=not inactive,
            on_hand=on_hand,
            safety_stock=safety_stock,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Flavor #{dto.id} '{dto.name}' added")


@click.command("list")
def flavor_list() -> None:
    """List flavors with their stock."""
    flavors = ListFlavorsHandler(unit_of_work()).handle()

    if not flavors:
        click.echo("No flavors found.")
        return

    click.echo(
        f"{'ID':<6} {'Name':<22} {'Active':<7} {'On hand':>8} {'Reserved':>9} {'Safety':>7}  Aliases"
    )
    click.echo("-" * 80)
    for f in flavors:
        inv = f.inventory
        on_hand = inv.on_hand if inv else "-"
        reserved = inv.reserved if inv else "-"
        safety = inv.safety_stock if inv else "-"
        click.echo(
            f"{f.id:<6} {f.name:<22} {'yes' if f.active else 'no':<7} "
            f"{on_hand:>8} {reserved:>9} {safety:>7}  {', '.join(f.aliases)}"
        )


@click.command("update")
@click.option("--id", "flavor_id", required=True, type=int, help="Flavor ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--aliases", default=None, help="Replacement comma-separated aliases.")
@click.option("--active/--inactive", default=None, help="Enable or disable the flavor.")
def flavor_update(
    flavor_id: int, name: str | None, aliases: str | None, active: bool | None
) -> None:
    """Rename a flavor, replace its aliases or toggle it."""
    handler = UpdateFlavorHandler(unit_of_work())

    try:
        dto = handler.handle(
            flavor_id, name=name, aliases=_split_aliases(aliases), active=active
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Flavor #{dto.id} '{dto.name}' updated")


@click.command("delete")
@click.option("--id", "flavor_id", required=True, type=int, help="Flavor ID.")
def flavor_delete(flavor_id: int) -> None:
    """Delete a flavor no recipe uses."""
    try:
        DeleteFlavorHandler(unit_of_work()).handle(flavor_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Flavor #{flavor_id} deleted")
