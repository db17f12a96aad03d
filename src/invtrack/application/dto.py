"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing more of the domain than a caller needs.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from invtrack.domain.model.order import Order
from invtrack.domain.model.product import Product
from invtrack.domain.model.stats import InventoryStats


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: which product (ID or SKU) and how many units."""

    product_ref: str
    quantity: int


@dataclass(frozen=True)
class DashboardDTO:
    """Output: the summary cards plus the supporting lists."""

    stats: InventoryStats
    low_stock: list[Product]
    value_by_category: dict[str, Decimal]
    recent_orders: list[Order]
