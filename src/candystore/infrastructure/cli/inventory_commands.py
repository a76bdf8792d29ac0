"""CLI commands for inventory management."""

from __future__ import annotations

import json

import click

from candystore.application.dto import LevelUpdateSpec
from candystore.application.low_stock_alerts import LowStockAlertsHandler
from candystore.application.set_inventory import RestockHandler, SetInventoryHandler
from candystore.application.show_inventory import ShowInventoryHandler
from candystore.domain.exceptions import DomainException
from candystore.infrastructure.bootstrap import unit_of_work
from candystore.infrastructure.config import get_settings


@click.command("set")
@click.option("--flavor", required=True, help="Flavor name or alias.")
@click.option("--on-hand", type=int, default=None, help="Units physically in stock.")
@click.option("--safety-stock", type=int, default=None, help="Units never sold.")
def inventory_set(flavor: str, on_hand: int | None, safety_stock: int | None) -> None:
    """Set stock levels for a flavor."""
    if on_hand is None and safety_stock is None:
        raise click.UsageError("Give --on-hand and/or --safety-stock")

    handler = SetInventoryHandler(unit_of_work())

    try:
        line = handler.handle(flavor_name=flavor, on_hand=on_hand, safety_stock=safety_stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Inventory for '{line.flavor_name}' set: on_hand={line.on_hand} "
        f"safety_stock={line.safety_stock} sellable={line.available_after_safety}"
    )


@click.command("restock")
@click.option("--flavor", required=True, help="Flavor name or alias.")
@click.option("--delta", required=True, type=int, help="Units to add (negative to write off).")
def inventory_restock(flavor: str, delta: int) -> None:
    """Add or write off physical units."""
    try:
        line = RestockHandler(unit_of_work()).handle(flavor_name=flavor, delta=delta)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Inventory for '{line.flavor_name}' now on_hand={line.on_hand}")


@click.command("bulk-set")
@click.argument("levels_file", type=click.File("r"))
def inventory_bulk_set(levels_file) -> None:
    """Apply a JSON list of {flavor_id, on_hand, safety_stock} updates."""
    try:
        raw = json.load(levels_file)
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"Invalid JSON: {exc}")
    if not isinstance(raw, list):
        raise click.ClickException("Expected a JSON list of updates")

    specs = [
        LevelUpdateSpec(
            flavor_id=entry.get("flavor_id"),
            on_hand=entry.get("on_hand"),
            safety_stock=entry.get("safety_stock"),
        )
        for entry in raw
    ]
    results = SetInventoryHandler(unit_of_work()).handle_bulk(specs)

    for r in results:
        if r.success:
            click.echo(f"flavor #{r.flavor_id}: ok (on_hand={r.inventory.on_hand})")
        else:
            click.echo(f"flavor #{r.flavor_id}: FAILED ({r.error})")
    ok = sum(1 for r in results if r.success)
    click.echo(f"{ok}/{len(results)} updates applied")


@click.command("show")
def inventory_show() -> None:
    """Show current inventory levels."""
    lines = ShowInventoryHandler(unit_of_work()).handle()

    if not lines:
        click.echo("No inventory records found.")
        return

    click.echo(
        f"{'Flavor':<22} {'On hand':>8} {'Reserved':>9} {'Safety':>7} "
        f"{'Available':>10} {'Sellable':>9}"
    )
    click.echo("-" * 70)
    for line in lines:
        click.echo(
            f"{line.flavor_name:<22} {line.on_hand:>8} {line.reserved:>9} "
            f"{line.safety_stock:>7} {line.available:>10} {line.available_after_safety:>9}"
        )


@click.command("alerts")
@click.option("--threshold", type=int, default=None, help="Low-stock threshold.")
def inventory_alerts(threshold: int | None) -> None:
    """List flavors running low or fully reserved."""
    if threshold is None:
        threshold = get_settings().low_stock_threshold

    try:
        report = LowStockAlertsHandler(unit_of_work()).handle(threshold=threshold)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"{report.total_alerts} alert(s) at threshold {report.threshold}: "
        f"{report.critical_alerts} critical, {report.warning_alerts} warning"
    )
    for a in report.alerts:
        click.echo(
            f"  [{a.severity:<8}] {a.flavor_name:<22} {a.alert_type:<13} "
            f"on_hand={a.on_hand} reserved={a.reserved} sellable={a.available_after_safety}"
        )
