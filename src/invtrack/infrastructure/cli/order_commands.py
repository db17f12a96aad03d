"""CLI commands for the Order aggregate."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from invtrack.application.create_order import CreateOrderHandler
from invtrack.application.delete_order import DeleteOrderHandler
from invtrack.application.dto import OrderItemSpec
from invtrack.application.update_order import ChangeOrderStatusHandler, UpdateOrderHandler
from invtrack.domain.exceptions import DomainException
from invtrack.domain.model.order import Order, OrderStatus, OrderType
from invtrack.infrastructure.bootstrap import order_repository, product_repository
from invtrack.infrastructure.persistence.store import KeyValueStore

_TYPES = [t.value for t in OrderType]
_STATUSES = [s.value for s in OrderStatus]
_DATE = click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S%z"])


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'LAP-001:3,MOU-002:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'Product:Quantity'."
            )
        ref, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{ref}'."
            )
        specs.append(OrderItemSpec(product_ref=ref.strip(), quantity=qty))
    return specs


def _as_utc(value: datetime | None) -> datetime | None:
    """Dates typed without an offset are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _format_utc(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


def _matches(order: Order, search: str) -> bool:
    needle = search.strip().lower()
    fields = (order.order_number, order.customer_name, order.supplier_name)
    return any(needle in f.lower() for f in fields if f)


def _display_order(order: Order) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {order.order_number}  ({order.type.value}, status={order.status.value})")
    click.echo(f"ID:       {order.id}")
    label = "Customer" if order.type == OrderType.SALE else "Supplier"
    click.echo(f"{label + ':':<10}{order.counterparty}")
    click.echo(f"Ordered:  {_format_utc(order.order_date)}")
    if order.completed_date is not None:
        click.echo(f"Completed: {_format_utc(order.completed_date)}")
    if order.notes:
        click.echo(f"Notes:    {order.notes}")
    click.echo()

    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Subtotal':>12}")
    click.echo(f"  {'-'*49}")
    for item in order.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity.value:>5} "
            f"{str(item.price):>10} {str(item.subtotal):>12}"
        )
    click.echo(f"  {'-'*49}")
    click.echo(f"  {'Order Total':<27} {str(order.total_amount):>22}")


@click.command("create")
@click.option("--type", "order_type", required=True, type=click.Choice(_TYPES), help="Order type.")
@click.option("--items", required=True, help="Items as 'Product:Qty,Product:Qty' (ID or SKU).")
@click.option("--customer", default=None, help="Customer name (sale orders).")
@click.option("--supplier", default=None, help="Supplier name (purchase orders).")
@click.option("--status", default=OrderStatus.PENDING.value, show_default=True, type=click.Choice(_STATUSES))
@click.option("--notes", default=None, help="Free-text notes.")
@click.option("--date", "order_date", default=None, type=_DATE, help="Order date (defaults to now, UTC).")
@click.pass_obj
def order_create(
    store: KeyValueStore,
    order_type: str,
    items: str,
    customer: str | None,
    supplier: str | None,
    status: str,
    notes: str | None,
    order_date: datetime | None,
) -> None:
    """Create a new sale or purchase order."""
    specs = _parse_items(items)

    handler = CreateOrderHandler(
        order_repo=order_repository(store),
        product_repo=product_repository(store),
    )

    try:
        order = handler.handle(
            order_type=order_type,
            item_specs=specs,
            customer_name=customer,
            supplier_name=supplier,
            status=status,
            notes=notes,
            order_date=_as_utc(order_date),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order.order_number} created  (status={order.status.value})")
    click.echo()
    _display_order(order)


@click.command("list")
@click.option("--search", default=None, help="Match order number, customer or supplier.")
@click.option("--type", "order_type", default=None, type=click.Choice(_TYPES), help="Only this order type.")
@click.option("--status", default=None, type=click.Choice(_STATUSES), help="Only this status.")
@click.pass_obj
def order_list(
    store: KeyValueStore,
    search: str | None,
    order_type: str | None,
    status: str | None,
) -> None:
    """List orders, optionally filtered."""
    try:
        orders = order_repository(store).list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    orders = [
        o for o in orders
        if (order_type is None or o.type.value == order_type)
        and (status is None or o.status.value == status)
        and (not search or _matches(o, search))
    ]

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(
        f"{'Number':<11} {'Type':<9} {'Status':<11} {'Party':<20} {'Total':>12}  {'ID'}"
    )
    click.echo("-" * 103)
    for o in orders:
        click.echo(
            f"{o.order_number:<11} {o.type.value:<9} {o.status.value:<11} "
            f"{(o.counterparty or ''):<20} {str(o.total_amount):>12}  {o.id}"
        )


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.pass_obj
def order_show(store: KeyValueStore, order_id: str) -> None:
    """Show details of an existing order."""
    try:
        order = order_repository(store).get_by_id(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if order is None:
        raise click.ClickException(f"Order {order_id} not found")
    _display_order(order)


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--status", required=True, type=click.Choice(_STATUSES), help="New status.")
@click.pass_obj
def order_status(store: KeyValueStore, order_id: str, status: str) -> None:
    """Change an order's status (completing it records the completion date)."""
    handler = ChangeOrderStatusHandler(order_repo=order_repository(store))

    try:
        order = handler.handle(order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if order is None:
        raise click.ClickException(f"Order {order_id} not found")
    click.echo(f"Order {order.order_number} is now {order.status.value}.")


@click.command("delete")
@click.option("--id", "order_id", required=True, help="Order ID to delete.")
@click.pass_obj
def order_delete(store: KeyValueStore, order_id: str) -> None:
    """Delete an order."""
    handler = DeleteOrderHandler(order_repo=order_repository(store))

    try:
        deleted = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not deleted:
        raise click.ClickException(f"Order {order_id} not found")
    click.echo(f"Order {order_id} deleted.")


@click.command("update")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--items", default=None, help="Replacement items as 'Product:Qty,...' (ID or SKU).")
@click.option("--customer", default=None, help="New customer name (sale orders).")
@click.option("--supplier", default=None, help="New supplier name (purchase orders).")
@click.option("--notes", default=None, help="New notes.")
@click.option("--date", "order_date", default=None, type=_DATE, help="New order date.")
@click.pass_obj
def order_update(
    store: KeyValueStore,
    order_id: str,
    items: str | None,
    customer: str | None,
    supplier: str | None,
    notes: str | None,
    order_date: datetime | None,
) -> None:
    """Edit an existing order's items, counterparty, date or notes."""
    specs = _parse_items(items) if items is not None else None
    changes = {
        k: v
        for k, v in {
            "customer_name": customer,
            "supplier_name": supplier,
            "notes": notes,
            "order_date": _as_utc(order_date),
        }.items()
        if v is not None
    }
    if not changes and specs is None:
        raise click.ClickException("Nothing to update: pass at least one field option")

    handler = UpdateOrderHandler(
        order_repo=order_repository(store),
        product_repo=product_repository(store),
    )

    try:
        order = handler.handle(order_id, changes, item_specs=specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if order is None:
        raise click.ClickException(f"Order {order_id} not found")
    click.echo(f"Order {order.order_number} updated.")
    click.echo()
    _display_order(order)
