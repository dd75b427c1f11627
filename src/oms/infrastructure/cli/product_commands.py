"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from oms.infrastructure.bootstrap import Container


@click.command("list")
@click.pass_obj
def product_list(container: Container) -> None:
    """List all products with price and stock."""
    with container.unit_of_work() as uow:
        products = uow.products.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 50)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<24} {str(p.price):>10} {p.stock:>7}")
