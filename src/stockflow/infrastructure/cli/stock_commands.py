"""CLI commands for stock movements and the stock ledger."""

from __future__ import annotations

import click

from stockflow.application.adjust_stock import AdjustStockHandler
from stockflow.application.reconcile_stock import ReconcileStockHandler
from stockflow.application.show_stock_ledger import ShowStockLedgerHandler
from stockflow.infrastructure.bootstrap import Services
from stockflow.infrastructure.cli.errors import cli_errors


@click.command("adjust")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option(
    "--type", "movement_type", required=True,
    type=click.Choice(["in", "out", "adjustment"]),
    help="'in' / 'out' move QUANTITY units; 'adjustment' sets on-hand to QUANTITY.",
)
@click.option("--quantity", required=True, type=int, help="Units (or new count for adjustment).")
@click.option("--cause", default=None, help="Reason recorded in the ledger.")
@click.pass_obj
def stock_adjust(
    services: Services, product_id: str, movement_type: str, quantity: int, cause: str | None
) -> None:
    """Record a manual stock movement."""
    with cli_errors():
        new_quantity = AdjustStockHandler(services.stock).handle(
            product_id, movement_type, quantity, cause
        )

    click.echo(f"Product #{product_id} now has {new_quantity} on hand.")


@click.command("ledger")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.pass_obj
def stock_ledger(services: Services, product_id: str) -> None:
    """Show a product's stock ledger, oldest first."""
    with cli_errors():
        entries = ShowStockLedgerHandler(services.lifecycle).handle(product_id)

    if not entries:
        click.echo("No stock movements recorded.")
        return

    click.echo(f"{'#':<6} {'When':<24} {'Type':<11} {'Qty':>6} {'Delta':>7}  Cause")
    click.echo("-" * 80)
    for e in entries:
        click.echo(
            f"{e.id:<6} {e.created_at:<24} {e.direction:<11} {e.quantity:>6} "
            f"{e.signed_delta:>+7}  {e.cause}"
        )


@click.command("reconcile")
@click.option("--product", "product_id", default=None, help="Only this product.")
@click.pass_obj
def stock_reconcile(services: Services, product_id: str | None) -> None:
    """Check that ledger history adds up to on-hand stock."""
    handler = ReconcileStockHandler(services.product_repo, services.stock)

    with cli_errors():
        summary = handler.handle(product_id)

    click.echo(f"{'ID':<6} {'SKU':<12} {'On hand':>8} {'Ledger':>8}  Result")
    click.echo("-" * 46)
    for r in summary.reports:
        result = "ok" if r.balanced else "MISMATCH"
        click.echo(f"{r.product_id:<6} {r.sku:<12} {r.on_hand:>8} {r.ledger_balance:>8}  {result}")

    if not summary.all_balanced:
        raise click.ClickException("Stock ledger does not reconcile.")
