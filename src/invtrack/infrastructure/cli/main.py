from pathlib import Path

import click

from invtrack.application.seed_sample_data import EnsureSeedDataHandler
from invtrack.domain.exceptions import DomainException
from invtrack.infrastructure.bootstrap import (
    DATA_DIR_ENV,
    DEFAULT_LOG_LEVEL,
    LOG_LEVEL_ENV,
    configure_logging,
    key_value_store,
    order_repository,
    product_repository,
)
from invtrack.infrastructure.cli.dashboard_commands import dashboard, seed as seed_command
from invtrack.infrastructure.cli.order_commands import (
    order_create,
    order_delete,
    order_list,
    order_show,
    order_status,
    order_update,
)
from invtrack.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_update,
)


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar=DATA_DIR_ENV,
    default=None,
    help="Directory holding the product and order collections.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    envvar=LOG_LEVEL_ENV,
    default=DEFAULT_LOG_LEVEL,
    show_default=True,
)
@click.option("--seed/--no-seed", default=True, help="Load sample data into empty collections.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, log_level: str, seed: bool) -> None:
    """invtrack — Inventory and order tracking"""
    configure_logging(log_level)
    store = key_value_store(data_dir)
    ctx.obj = store

    if seed:
        handler = EnsureSeedDataHandler(
            product_repo=product_repository(store),
            order_repo=order_repository(store),
        )
        try:
            handler.handle()
        except DomainException as exc:
            raise click.ClickException(str(exc))


@cli.group()
def order() -> None:
    """Manage sale and purchase orders."""


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
order.add_command(order_update)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_update)
cli.add_command(dashboard)
cli.add_command(seed_command)
