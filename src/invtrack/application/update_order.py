"""Application services: Update Order and Change Order Status use cases."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from invtrack.application.create_order import resolve_items
from invtrack.application.dto import OrderItemSpec
from invtrack.domain.model.order import Order, OrderStatus
from invtrack.domain.repository.order_repository import OrderRepository
from invtrack.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class UpdateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(
        self,
        order_id: str,
        changes: Mapping[str, Any],
        item_specs: list[OrderItemSpec] | None = None,
    ) -> Order | None:
        """Apply a partial update; returns None if the order does not exist.

        Replacing ``items`` recomputes the total. A ``total_amount`` in
        *changes* is only accepted if it matches the new subtotals.
        *item_specs* replaces the lines with fresh snapshots of the
        referenced products, exactly as order creation builds them.
        """
        changes = dict(changes)
        if item_specs is not None:
            if self._product_repo is None:
                raise TypeError("UpdateOrderHandler needs a product repository to resolve items")
            changes["items"] = resolve_items(self._product_repo, item_specs)
        return self._order_repo.update(order_id, changes)


class ChangeOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, status: OrderStatus | str) -> Order | None:
        """Move an order to *status*.

        Completing an order stamps its completed date; moving it to any
        other status clears the date again.
        """
        order = self._order_repo.update(order_id, {"status": status})
        if order is not None:
            logger.info("Order %s is now %s", order.order_number, order.status.value)
        return order
