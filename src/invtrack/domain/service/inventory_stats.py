"""Domain service: inventory statistics.

Every figure is recomputed from the current product and order
collections on each call. Nothing is cached, so the numbers can never
lag behind a mutation.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Iterable

from invtrack.domain.model.order import Order, OrderStatus
from invtrack.domain.model.product import Product
from invtrack.domain.model.stats import InventoryStats
from invtrack.domain.repository.order_repository import OrderRepository
from invtrack.domain.repository.product_repository import ProductRepository


def calculate_inventory_stats(
    products: Iterable[Product],
    orders: Iterable[Order],
) -> InventoryStats:
    """Pure aggregation; empty inputs give all-zero stats."""
    products = list(products)
    orders = list(orders)
    return InventoryStats(
        total_products=len(products),
        total_value=sum((p.stock_value.amount for p in products), Decimal("0")),
        low_stock_items=sum(1 for p in products if p.is_low_stock),
        out_of_stock=sum(1 for p in products if p.is_out_of_stock),
        total_orders=len(orders),
        pending_orders=sum(1 for o in orders if o.status == OrderStatus.PENDING),
    )


def low_stock_products(products: Iterable[Product]) -> list[Product]:
    """Products that need reordering, scarcest first.

    Out-of-stock products are reported separately and excluded here.
    """
    return sorted((p for p in products if p.is_low_stock), key=lambda p: p.quantity)


def value_by_category(products: Iterable[Product]) -> dict[str, Decimal]:
    """Stock value per category, largest first."""
    totals: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
    for product in products:
        totals[product.category or "Uncategorized"] += product.stock_value.amount
    return dict(sorted(totals.items(), key=lambda kv: kv[1], reverse=True))


def recent_orders(orders: Iterable[Order], limit: int = 5) -> list[Order]:
    return sorted(orders, key=lambda o: o.order_date, reverse=True)[:limit]


class InventoryStatsService:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo

    def compute(self) -> InventoryStats:
        return calculate_inventory_stats(
            self._product_repo.list_all(),
            self._order_repo.list_all(),
        )
