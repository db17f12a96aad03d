"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from invtrack.application.add_product import AddProductHandler
from invtrack.application.delete_product import DeleteProductHandler
from invtrack.application.update_product import UpdateProductHandler
from invtrack.domain.exceptions import DomainException
from invtrack.domain.model.product import ProductDraft, StockStatus
from invtrack.infrastructure.bootstrap import product_repository
from invtrack.infrastructure.persistence.store import KeyValueStore

_STATUS_LABELS = {
    StockStatus.IN_STOCK: "In Stock",
    StockStatus.LOW_STOCK: "Low Stock",
    StockStatus.OUT_OF_STOCK: "Out of Stock",
}


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--sku", required=True, help="Stock-keeping unit code.")
@click.option("--price", required=True, help="Unit price (e.g. 15.00).")
@click.option("--quantity", default=0, show_default=True, type=int, help="Units in stock.")
@click.option("--reorder-level", default=0, show_default=True, type=int, help="Restock threshold.")
@click.option("--category", default="", help="Category.")
@click.option("--supplier", default="", help="Supplier name.")
@click.option("--description", default=None, help="Free-text description.")
@click.pass_obj
def product_add(
    store: KeyValueStore,
    name: str,
    sku: str,
    price: str,
    quantity: int,
    reorder_level: int,
    category: str,
    supplier: str,
    description: str | None,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository(store))
    draft = ProductDraft(
        name=name,
        sku=sku,
        price=price,
        quantity=quantity,
        reorder_level=reorder_level,
        category=category,
        supplier=supplier,
        description=description,
    )

    try:
        product = handler.handle(draft)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' ({product.sku}) added at {product.price}")


@click.command("list")
@click.option("--search", default=None, help="Match name, SKU, category or supplier.")
@click.pass_obj
def product_list(store: KeyValueStore, search: str | None) -> None:
    """List products in the catalog."""
    try:
        products = product_repository(store).list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if search:
        needle = search.strip().lower()
        products = [
            p for p in products
            if any(needle in f.lower() for f in (p.name, p.sku, p.category, p.supplier))
        ]

    if not products:
        click.echo("No products found.")
        return

    click.echo(
        f"{'ID':<36} {'SKU':<10} {'Name':<20} {'Qty':>6} {'Price':>10}  {'Status'}"
    )
    click.echo("-" * 98)
    for p in products:
        click.echo(
            f"{p.id:<36} {p.sku:<10} {p.name:<20} {p.quantity:>6} {str(p.price):>10}  "
            f"{_STATUS_LABELS[p.stock_status]}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--sku", default=None, help="New SKU.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--quantity", default=None, type=int, help="New stock count.")
@click.option("--reorder-level", default=None, type=int, help="New restock threshold.")
@click.option("--category", default=None, help="New category.")
@click.option("--supplier", default=None, help="New supplier.")
@click.option("--description", default=None, help="New description.")
@click.pass_obj
def product_update(store: KeyValueStore, product_id: str, **fields: object) -> None:
    """Update one or more fields of a product."""
    changes = {k: v for k, v in fields.items() if v is not None}
    if not changes:
        raise click.ClickException("Nothing to update: pass at least one field option")

    handler = UpdateProductHandler(product_repo=product_repository(store))

    try:
        product = handler.handle(product_id=product_id, changes=changes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if product is None:
        raise click.ClickException(f"Product with ID '{product_id}' not found")
    click.echo(f"Product {product.id} updated ({', '.join(sorted(changes))})")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_delete(store: KeyValueStore, product_id: str) -> None:
    """Delete a product. Existing orders keep their line items."""
    handler = DeleteProductHandler(product_repo=product_repository(store))

    try:
        deleted = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not deleted:
        raise click.ClickException(f"Product with ID '{product_id}' not found")
    click.echo(f"Product {product_id} deleted.")
