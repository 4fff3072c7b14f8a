"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from stockflow.application.add_product import AddProductHandler
from stockflow.application.dto import AddProductRequest
from stockflow.application.remove_product import RemoveProductHandler
from stockflow.application.show_inventory import ShowInventoryHandler
from stockflow.application.update_product import UpdateProductHandler
from stockflow.infrastructure.bootstrap import Services
from stockflow.infrastructure.cli.errors import cli_errors


@click.command("add")
@click.option("--sku", required=True, help="Unique SKU.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price (e.g. 15.00).")
@click.option("--quantity", type=int, default=0, show_default=True, help="Opening stock.")
@click.option("--min-stock", type=int, default=0, show_default=True, help="Low-stock threshold.")
@click.pass_obj
def product_add(
    services: Services, sku: str, name: str, price: str, quantity: int, min_stock: int
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(services.product_repo, services.stock, services.locks)

    with cli_errors():
        dto = handler.handle(
            AddProductRequest(
                sku=sku, name=name, price=price, quantity=quantity, minimum_stock=min_stock
            )
        )

    click.echo(f"Product #{dto.id} {dto.sku} '{dto.name}' added at {dto.price} ({dto.quantity} on hand)")


@click.command("list")
@click.option("--low-stock", is_flag=True, default=False, help="Only products at or below minimum stock.")
@click.option(
    "--status", type=click.Choice(["active", "inactive"]), default=None, help="Only this status."
)
@click.option("--search", default=None, help="Match name or SKU (case-insensitive).")
@click.pass_obj
def product_list(
    services: Services, low_stock: bool, status: str | None, search: str | None
) -> None:
    """List products with their stock levels."""
    with cli_errors():
        products = ShowInventoryHandler(services.product_repo).handle(
            low_stock_only=low_stock, status=status, search=search
        )

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'SKU':<12} {'Name':<20} {'Price':>10} {'On hand':>8} {'Min':>5} {'Status':<9}")
    click.echo("-" * 76)
    for p in products:
        flag = " LOW" if p.low_stock else ""
        click.echo(
            f"{p.id:<6} {p.sku:<12} {p.name:<20} {p.price:>10} "
            f"{p.quantity:>8} {p.minimum_stock:>5} {p.status:<9}{flag}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--min-stock", type=int, default=None, help="New low-stock threshold.")
@click.option(
    "--status", type=click.Choice(["active", "inactive"]), default=None, help="New status."
)
@click.pass_obj
def product_update(
    services: Services,
    product_id: str,
    name: str | None,
    price: str | None,
    min_stock: int | None,
    status: str | None,
) -> None:
    """Update a product's name, price, minimum stock or status."""
    handler = UpdateProductHandler(services.product_repo)

    with cli_errors():
        dto = handler.handle(
            product_id=product_id,
            name=name,
            price=price,
            minimum_stock=min_stock,
            status=status,
        )

    click.echo(f"Product #{dto.id} {dto.sku} updated.")


@click.command("remove")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_remove(services: Services, product_id: str) -> None:
    """Delete a product, or deactivate it if it has history."""
    handler = RemoveProductHandler(
        services.product_repo, services.order_repo, services.ledger, services.locks
    )

    with cli_errors():
        result = handler.handle(product_id)

    if result.deleted:
        click.echo(f"Product #{product_id} deleted.")
    else:
        click.echo(f"Product #{product_id} deactivated (has order or stock history).")
