"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
stock levels and prices change, products are added and removed from the
catalog. Orders keep their own snapshot of name and price, so nothing
here cascades into them.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

from invtrack.domain.exceptions import ValidationError
from invtrack.domain.model.value_objects import (
    Money,
    non_negative_int,
    optional_text,
    require_text,
)


class StockStatus(Enum):
    IN_STOCK = "in_stock"
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"


# Fields a caller may change through ``Product.with_changes``.
MUTABLE_FIELDS = frozenset(
    {
        "name",
        "sku",
        "category",
        "supplier",
        "quantity",
        "price",
        "reorder_level",
        "description",
    }
)
IMMUTABLE_FIELDS = frozenset({"id", "created_at", "updated_at"})


@dataclass(frozen=True)
class ProductDraft:
    """Everything needed to create a product except identity and timestamps."""

    name: str
    sku: str
    price: Money | Decimal | str | int | float
    quantity: int = 0
    reorder_level: int = 0
    category: str = ""
    supplier: str = ""
    description: str | None = None


@dataclass
class Product:
    """A product in the catalog.

    Use ``Product.create()`` for new products. The ``__init__`` stays
    simple so the repository can reconstitute persisted products without
    re-validating.
    """

    id: str
    name: str
    sku: str
    category: str
    supplier: str
    quantity: int
    price: Money
    reorder_level: int
    created_at: datetime
    updated_at: datetime
    description: str | None = None

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(product_id: str, draft: ProductDraft, now: datetime) -> Product:
        product = Product(
            id=product_id,
            name=draft.name,
            sku=draft.sku,
            category=draft.category,
            supplier=draft.supplier,
            quantity=draft.quantity,
            price=Money.of(draft.price),
            reorder_level=draft.reorder_level,
            description=draft.description,
            created_at=now,
            updated_at=now,
        )
        return product.validated()

    # --- Mutation -------------------------------------------------------------

    def with_changes(self, changes: Mapping[str, Any], now: datetime) -> Product:
        """Overlay *changes* onto a copy of this product.

        Unspecified fields keep their values. ``updated_at`` always moves
        strictly forward, even if the clock did not.
        """
        unknown = set(changes) - MUTABLE_FIELDS - IMMUTABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown product field(s): {', '.join(sorted(unknown))}")
        frozen = set(changes) & IMMUTABLE_FIELDS
        if frozen:
            raise ValidationError(f"Cannot change product field(s): {', '.join(sorted(frozen))}")

        values = dict(changes)
        if "price" in values:
            values["price"] = Money.of(values["price"])
        if now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)

        return dataclasses.replace(self, **values, updated_at=now).validated()

    def validated(self) -> Product:
        """Return a normalised copy, raising ValidationError on bad fields."""
        return dataclasses.replace(
            self,
            name=require_text(self.name, "Product name"),
            sku=require_text(self.sku, "SKU"),
            category=_plain_text(self.category, "Category"),
            supplier=_plain_text(self.supplier, "Supplier"),
            quantity=non_negative_int(self.quantity, "Quantity"),
            reorder_level=non_negative_int(self.reorder_level, "Reorder level"),
            price=Money.of(self.price),
            description=optional_text(self.description, "Description"),
        )

    # --- Computed properties --------------------------------------------------

    @property
    def is_out_of_stock(self) -> bool:
        return self.quantity == 0

    @property
    def is_low_stock(self) -> bool:
        """Still in stock, but at or below the reorder threshold."""
        return 0 < self.quantity <= self.reorder_level

    @property
    def stock_status(self) -> StockStatus:
        if self.is_out_of_stock:
            return StockStatus.OUT_OF_STOCK
        if self.is_low_stock:
            return StockStatus.LOW_STOCK
        return StockStatus.IN_STOCK

    @property
    def stock_value(self) -> Money:
        return self.price * self.quantity


def _plain_text(value: object, label: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be text")
    return value.strip()
