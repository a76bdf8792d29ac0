import click

from candystore.domain.service.logging_utils import configure_logging
from candystore.infrastructure.bootstrap import init_db
from candystore.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from candystore.infrastructure.cli.flavor_commands import (
    flavor_add,
    flavor_delete,
    flavor_list,
    flavor_update,
)
from candystore.infrastructure.cli.inventory_commands import (
    inventory_alerts,
    inventory_bulk_set,
    inventory_restock,
    inventory_set,
    inventory_show,
)
from candystore.infrastructure.cli.order_commands import (
    order_checkout,
    order_list,
    order_show,
)
from candystore.infrastructure.cli.recipe_commands import (
    pack_availability,
    pack_show,
    recipe_create,
    recipe_delete,
    recipe_list,
    recipe_show,
    recipe_update,
)
from candystore.infrastructure.config import get_settings


@click.group()
def cli() -> None:
    """candystore: 3-pack inventory and reservations"""
    configure_logging(get_settings().log_level)


@cli.group()
def flavor() -> None:
    """Manage flavors."""


@cli.group()
def recipe() -> None:
    """Manage pack recipes."""


@cli.group()
def pack() -> None:
    """Browse the 3-pack product."""


@cli.group()
def inventory() -> None:
    """Manage inventory."""


@cli.group()
def cart() -> None:
    """Manage a shopper's 3-pack cart."""


@cli.group()
def order() -> None:
    """Check out and inspect orders."""


@cli.group()
def db() -> None:
    """Database maintenance."""


@db.command("init")
def db_init() -> None:
    """Create all tables (safe to run repeatedly)."""
    init_db()
    click.echo("Database initialized")


# Register subcommands
flavor.add_command(flavor_add)
flavor.add_command(flavor_delete)
flavor.add_command(flavor_list)
flavor.add_command(flavor_update)
recipe.add_command(recipe_create)
recipe.add_command(recipe_delete)
recipe.add_command(recipe_list)
recipe.add_command(recipe_show)
recipe.add_command(recipe_update)
pack.add_command(pack_availability)
pack.add_command(pack_show)
inventory.add_command(inventory_alerts)
inventory.add_command(inventory_bulk_set)
inventory.add_command(inventory_restock)
inventory.add_command(inventory_set)
inventory.add_command(inventory_show)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
order.add_command(order_checkout)
order.add_command(order_list)
order.add_command(order_show)
