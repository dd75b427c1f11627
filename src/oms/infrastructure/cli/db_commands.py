"""CLI commands for schema setup, demo data and the HTTP server."""

from __future__ import annotations

import click
import uvicorn

from oms.infrastructure.bootstrap import Container, create_schema
from oms.infrastructure.http.app import create_app
from oms.infrastructure.seed import seed_demo_data


@click.command("init")
@click.pass_obj
def db_init(container: Container) -> None:
    """Create all tables (existing tables are left alone)."""
    create_schema(container.engine)
    click.echo("Database schema created.")


@click.command("seed")
@click.pass_obj
def db_seed(container: Container) -> None:
    """Insert demo users and products."""
    create_schema(container.engine)
    users, products = seed_demo_data(container.unit_of_work())
    click.echo(f"Seeded {users} user(s) and {products} product(s).")


@click.command("serve")
@click.option("--host", default=None, help="Bind address (defaults to $OMS_HOST).")
@click.option("--port", default=None, type=int, help="Port (defaults to $OMS_PORT).")
@click.pass_obj
def serve(container: Container, host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    create_schema(container.engine)
    app = create_app(container.settings, engine=container.engine)
    uvicorn.run(
        app,
        host=host or container.settings.host,
        port=port or container.settings.port,
        log_config=None,
    )
