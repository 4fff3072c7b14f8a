"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from stockflow.application.create_order import CreateOrderHandler
from stockflow.application.delete_order import DeleteOrderHandler
from stockflow.application.dto import CreateOrderRequest, OrderDTO, OrderLineSpec
from stockflow.application.edit_order import EditOrderHandler
from stockflow.application.list_orders import ListOrdersHandler
from stockflow.application.show_order import ShowOrderHandler
from stockflow.application.transition_order import TransitionOrderStatusHandler
from stockflow.domain.model.order import OrderStatus
from stockflow.infrastructure.bootstrap import Services
from stockflow.infrastructure.cli.errors import cli_errors

_STATUS_CHOICE = click.Choice([s.value for s in OrderStatus], case_sensitive=False)


def _parse_lines(raw: str) -> list[OrderLineSpec]:
    """Parse '1:3,2:5' (product ID:quantity) into OrderLineSpec list."""
    specs: list[OrderLineSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid line format '{pair}'. Expected 'ProductID:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderLineSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.number} (#{dto.id})  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_ref}")
    click.echo(f"Created:  {dto.ordered_at} by {dto.created_by}")
    if dto.notes:
        click.echo(f"Notes:    {dto.notes}")
    click.echo()
    click.echo(f"  {'SKU':<12} {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*60}")
    for line in dto.lines:
        click.echo(
            f"  {line.sku:<12} {line.product_name:<20} {line.quantity:>5} "
            f"{line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*60}")
    click.echo(f"  {'Order Total':<40} {dto.total:>20}")


@click.command("create")
@click.option("--customer", required=True, help="Customer reference.")
@click.option("--items", required=True, help="Lines as 'ProductID:Qty,ProductID:Qty'.")
@click.option(
    "--status", "initial_status", type=_STATUS_CHOICE,
    default=OrderStatus.PENDING.value, show_default=True,
    help="Initial status; 'completed' commits stock immediately.",
)
@click.pass_obj
def order_create(services: Services, customer: str, items: str, initial_status: str) -> None:
    """Create a new sales order."""
    request = CreateOrderRequest(
        customer_ref=customer,
        created_by=services.settings.actor,
        lines=_parse_lines(items),
        initial_status=initial_status,
    )
    handler = CreateOrderHandler(services.lifecycle)

    with cli_errors():
        dto = handler.handle(request)

    click.echo(f"Order {dto.number} created  (status={dto.status})")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(services: Services, order_id: int) -> None:
    """Show details of an existing order."""
    with cli_errors():
        dto = ShowOrderHandler(services.lifecycle).handle(order_id)

    _display_order(dto)


@click.command("list")
@click.option("--status", type=_STATUS_CHOICE, default=None, help="Only this status.")
@click.option("--search", default=None, help="Match order number or customer reference.")
@click.pass_obj
def order_list(services: Services, status: str | None, search: str | None) -> None:
    """List orders, newest first."""
    with cli_errors():
        orders = ListOrdersHandler(services.lifecycle).handle(status, search=search)

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Number':<12} {'Customer':<20} {'Status':<11} {'Total':>12}")
    click.echo("-" * 65)
    for dto in orders:
        click.echo(
            f"{dto.id:<6} {dto.number:<12} {dto.customer_ref:<20} "
            f"{dto.status:<11} {dto.total:>12}"
        )


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--to", "target", required=True, type=_STATUS_CHOICE, help="Target status.")
@click.pass_obj
def order_status(services: Services, order_id: int, target: str) -> None:
    """Move an order to a new status (completing commits stock, cancelling a
    completed order returns it)."""
    with cli_errors():
        dto = TransitionOrderStatusHandler(services.lifecycle).handle(order_id, target)

    click.echo(f"Order {dto.number} is now {dto.status}.")


@click.command("edit")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--customer", default=None, help="New customer reference.")
@click.option("--notes", default=None, help="New notes.")
@click.pass_obj
def order_edit(services: Services, order_id: int, customer: str | None, notes: str | None) -> None:
    """Edit an order's customer reference or notes."""
    with cli_errors():
        dto = EditOrderHandler(services.lifecycle).handle(
            order_id, customer_ref=customer, notes=notes
        )

    click.echo(f"Order {dto.number} updated.")


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.pass_obj
def order_delete(services: Services, order_id: int) -> None:
    """Delete an order (completed orders must be cancelled first)."""
    with cli_errors():
        DeleteOrderHandler(services.lifecycle).handle(order_id)

    click.echo(f"Order #{order_id} deleted.")
