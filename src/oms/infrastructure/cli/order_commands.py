"""CLI commands for the Order aggregate (admin views)."""

from __future__ import annotations

import click

from oms.application.dto import OrderDTO
from oms.application.list_orders import ListOrdersHandler, PageRequest, build_order_filter
from oms.application.show_order import ShowOrderHandler
from oms.application.show_order_history import ShowOrderHistoryHandler
from oms.application.update_order_status import UpdateOrderStatusHandler
from oms.domain.exceptions import DomainException
from oms.domain.model.order import OrderStatus
from oms.domain.model.value_objects import Money
from oms.infrastructure.bootstrap import Container


def _money(amount) -> str:
    return str(Money(amount))


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_email or f'user #{dto.user_id}'}")
    click.echo(f"Created:  {dto.created_at.strftime('%Y-%m-%d %H:%M UTC')}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} "
            f"{_money(item.unit_price):>10} {_money(item.line_total):>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {_money(dto.total):>20}")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(container: Container, order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(container.unit_of_work())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--page", default=None, help="Page number (1-based).")
@click.option("--limit", default=None, help="Orders per page.")
@click.option("--email", default=None, help="Customer email contains (case-insensitive).")
@click.option("--min-total", default=None, help="Minimum order total.")
@click.option("--max-total", default=None, help="Maximum order total.")
@click.option("--date-from", default=None, help="Created on or after (ISO-8601).")
@click.option("--date-to", default=None, help="Created on or before (ISO-8601).")
@click.pass_obj
def order_list(
    container: Container,
    page: str | None,
    limit: str | None,
    email: str | None,
    min_total: str | None,
    max_total: str | None,
    date_from: str | None,
    date_to: str | None,
) -> None:
    """List orders, newest first, with optional filters."""
    try:
        criteria = build_order_filter(
            email=email,
            min_total=min_total,
            max_total=max_total,
            date_from=date_from,
            date_to=date_to,
        )
        result = ListOrdersHandler(container.unit_of_work()).handle(
            criteria, PageRequest.parse(page, limit)
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.data:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Customer':<28} {'Status':<10} {'Total':>10}  Created")
    click.echo("-" * 75)
    for o in result.data:
        click.echo(
            f"{o.id:<6} {(o.customer_email or '-'):<28} {o.status:<10} "
            f"{_money(o.total):>10}  {o.created_at.strftime('%Y-%m-%d %H:%M')}"
        )
    click.echo()
    click.echo(
        f"Page {result.page} of {result.total_pages} "
        f"({result.total} order(s), {result.limit} per page)"
    )


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option(
    "--status",
    "new_status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    help="New status.",
)
@click.option("--by", "acting_user_id", required=True, type=int, help="Acting admin user ID.")
@click.pass_obj
def order_status(container: Container, order_id: int, new_status: str, acting_user_id: int) -> None:
    """Change an order's status (records a history entry)."""
    handler = UpdateOrderStatusHandler(container.unit_of_work())

    try:
        dto = handler.handle(order_id, new_status, acting_user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} is now {dto.status}.")


@click.command("history")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.pass_obj
def order_history(container: Container, order_id: int) -> None:
    """Show the status history of an order, newest first."""
    handler = ShowOrderHistoryHandler(container.unit_of_work())

    try:
        entries = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not entries:
        click.echo(f"Order #{order_id} has no status changes.")
        return

    for entry in entries:
        who = entry.changed_by_email or f"user #{entry.changed_by_id}"
        click.echo(
            f"{entry.changed_at.strftime('%Y-%m-%d %H:%M:%S')}  "
            f"{entry.from_status} -> {entry.to_status}  by {who}"
        )
