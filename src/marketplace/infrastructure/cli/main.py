import logging

import click

from marketplace.infrastructure import bootstrap
from marketplace.infrastructure.cli.db_commands import db_init, db_seed
from marketplace.infrastructure.cli.order_commands import (
    order_claim,
    order_create,
    order_delete,
    order_list,
    order_show,
    order_status,
)

LOG_FORMAT = "%(asctime)s [%(levelname)s] [marketplace] %(message)s"


@click.group()
@click.option("--log-level", default=None, help="Override MARKETPLACE_LOG_LEVEL.")
def cli(log_level: str | None) -> None:
    """Marketplace delivery order engine."""
    level = (log_level or bootstrap.settings().log_level).upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)


@cli.group()
def order() -> None:
    """Place and drive orders."""


@cli.group()
def db() -> None:
    """Manage the local database."""


# Register subcommands
order.add_command(order_claim)
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
db.add_command(db_init)
db.add_command(db_seed)
