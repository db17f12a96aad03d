"""CLI commands for the dashboard and sample data."""

from __future__ import annotations

import click

from invtrack.application.seed_sample_data import EnsureSeedDataHandler
from invtrack.application.show_dashboard import ShowDashboardHandler
from invtrack.domain.exceptions import DomainException
from invtrack.infrastructure.bootstrap import order_repository, product_repository
from invtrack.infrastructure.persistence.store import KeyValueStore


@click.command("dashboard")
@click.option("--recent", default=5, show_default=True, type=int, help="Recent orders to list.")
@click.pass_obj
def dashboard(store: KeyValueStore, recent: int) -> None:
    """Show inventory statistics."""
    handler = ShowDashboardHandler(
        product_repo=product_repository(store),
        order_repo=order_repository(store),
    )

    try:
        dto = handler.handle(recent_limit=recent)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    stats = dto.stats
    click.echo(f"{'Total products':<18} {stats.total_products:>12}")
    click.echo(f"{'Inventory value':<18} {stats.total_value:>12.2f}")
    click.echo(f"{'Low stock':<18} {stats.low_stock_items:>12}")
    click.echo(f"{'Out of stock':<18} {stats.out_of_stock:>12}")
    click.echo(f"{'Total orders':<18} {stats.total_orders:>12}")
    click.echo(f"{'Pending orders':<18} {stats.pending_orders:>12}")

    if dto.low_stock:
        click.echo()
        click.echo("Low stock alerts:")
        for p in dto.low_stock:
            click.echo(f"  {p.name:<20} {p.quantity:>5} left (reorder at {p.reorder_level})")

    if dto.value_by_category:
        click.echo()
        click.echo("Value by category:")
        for category, value in dto.value_by_category.items():
            click.echo(f"  {category:<20} {value:>12.2f}")

    if dto.recent_orders:
        click.echo()
        click.echo("Recent orders:")
        for o in dto.recent_orders:
            click.echo(
                f"  {o.order_number:<11} {o.type.value:<9} {o.status.value:<11} "
                f"{str(o.total_amount):>12}"
            )


@click.command("seed")
@click.pass_obj
def seed(store: KeyValueStore) -> None:
    """Load sample products and orders into empty collections."""
    handler = EnsureSeedDataHandler(
        product_repo=product_repository(store),
        order_repo=order_repository(store),
    )

    try:
        handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Sample data ensured.")
