"""InventoryStats: dashboard summary derived from the current collections.

Never persisted; rebuilt on every request.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class InventoryStats:
    total_products: int = 0
    total_value: Decimal = Decimal("0")
    low_stock_items: int = 0
    out_of_stock: int = 0
    total_orders: int = 0
    pending_orders: int = 0
