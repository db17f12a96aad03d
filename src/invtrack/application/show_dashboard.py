"""Application service: Show Dashboard use case (query)."""

from __future__ import annotations

from invtrack.application.dto import DashboardDTO
from invtrack.domain.repository.order_repository import OrderRepository
from invtrack.domain.repository.product_repository import ProductRepository
from invtrack.domain.service.inventory_stats import (
    calculate_inventory_stats,
    low_stock_products,
    recent_orders,
    value_by_category,
)


class ShowDashboardHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo

    def handle(self, recent_limit: int = 5) -> DashboardDTO:
        products = self._product_repo.list_all()
        orders = self._order_repo.list_all()
        return DashboardDTO(
            stats=calculate_inventory_stats(products, orders),
            low_stock=low_stock_products(products),
            value_by_category=value_by_category(products),
            recent_orders=recent_orders(orders, limit=recent_limit),
        )
