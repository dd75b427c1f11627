import dataclasses

import click

from oms.infrastructure.bootstrap import Container
from oms.infrastructure.cli.db_commands import db_init, db_seed, serve
from oms.infrastructure.cli.order_commands import (
    order_history,
    order_list,
    order_show,
    order_status,
)
from oms.infrastructure.cli.product_commands import product_list
from oms.infrastructure.config import Settings
from oms.infrastructure.logging import configure_logging


@click.group()
@click.option(
    "--database-url",
    default=None,
    help="SQLAlchemy database URL (defaults to $OMS_DATABASE_URL).",
)
@click.pass_context
def cli(ctx: click.Context, database_url: str | None) -> None:
    """OMS: Order Management System"""
    settings = Settings.from_env()
    if database_url:
        settings = dataclasses.replace(settings, database_url=database_url)
    configure_logging(settings.log_level, json=settings.log_json, sql_echo=settings.sql_echo)
    ctx.obj = Container(settings)


@cli.group()
def db() -> None:
    """Manage the database."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Browse products."""


# Register subcommands
cli.add_command(serve)
db.add_command(db_init)
db.add_command(db_seed)
order.add_command(order_history)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_list)
