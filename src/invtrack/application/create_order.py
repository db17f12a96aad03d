"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain model.
This is the only place that coordinates both aggregates (Product
lookup + Order creation).
"""

from __future__ import annotations

from datetime import datetime

from invtrack.application.dto import OrderItemSpec
from invtrack.domain.exceptions import EntityNotFoundError, ValidationError
from invtrack.domain.model.order import (
    Order,
    OrderDraft,
    OrderItem,
    OrderStatus,
    OrderType,
    merge_items,
)
from invtrack.domain.repository.order_repository import OrderRepository
from invtrack.domain.repository.product_repository import ProductRepository


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(
        self,
        order_type: OrderType | str,
        item_specs: list[OrderItemSpec],
        customer_name: str | None = None,
        supplier_name: str | None = None,
        status: OrderStatus | str = OrderStatus.PENDING,
        notes: str | None = None,
        order_date: datetime | None = None,
    ) -> Order:
        """Create a new sale or purchase order.

        Steps:
        1. Resolve each product reference (ID or SKU) to a Product.
        2. Build OrderItems with the *current* name and price (snapshot).
        3. Merge repeated products into a single line.
        4. Let the Order aggregate validate all business rules and persist.
        """
        draft = OrderDraft(
            type=order_type,
            items=resolve_items(self._product_repo, item_specs),
            status=status,
            customer_name=customer_name,
            supplier_name=supplier_name,
            order_date=order_date,
            notes=notes,
        )
        return self._order_repo.create(draft)


def resolve_items(
    product_repo: ProductRepository,
    item_specs: list[OrderItemSpec],
) -> list[OrderItem]:
    """Turn product references (ID or SKU) into merged price snapshots."""
    if not item_specs:
        raise ValidationError("Order must contain at least one item")

    items = []
    for spec in item_specs:
        product = product_repo.get_by_id(spec.product_ref)
        if product is None:
            product = product_repo.get_by_sku(spec.product_ref)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{spec.product_ref}'")
        items.append(OrderItem.snapshot(product, spec.quantity))
    return merge_items(items)
