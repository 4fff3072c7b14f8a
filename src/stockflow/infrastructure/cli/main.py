from __future__ import annotations

from pathlib import Path

import click

from stockflow.domain.exceptions import DomainException
from stockflow.infrastructure.bootstrap import build_services
from stockflow.infrastructure.cli.errors import cli_errors
from stockflow.infrastructure.cli.order_commands import (
    order_create,
    order_delete,
    order_edit,
    order_list,
    order_show,
    order_status,
)
from stockflow.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_remove,
    product_update,
)
from stockflow.infrastructure.cli.stock_commands import (
    stock_adjust,
    stock_ledger,
    stock_reconcile,
)
from stockflow.infrastructure.config import Settings
from stockflow.logging_config import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the JSON data files (env: STOCKFLOW_DATA_DIR).",
)
@click.option("--actor", default=None, help="Who is acting (env: STOCKFLOW_ACTOR).")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, actor: str | None) -> None:
    """stockflow: orders, stock and the stock ledger."""
    try:
        settings = Settings.from_env().with_overrides(data_dir=data_dir, actor=actor)
    except DomainException as exc:
        raise click.UsageError(str(exc)) from exc

    configure_logging(level=settings.log_level)
    with cli_errors():
        ctx.obj = build_services(settings)


@cli.group()
def order() -> None:
    """Manage sales orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def stock() -> None:
    """Move stock and audit the stock ledger."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_edit)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_remove)
product.add_command(product_update)
stock.add_command(stock_adjust)
stock.add_command(stock_ledger)
stock.add_command(stock_reconcile)
