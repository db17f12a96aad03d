"""Order aggregate.

An Order owns its line items. Each line keeps a snapshot of the product
name and price taken when the line was added, so later catalog edits (or
deleting the product altogether) never rewrite an existing order.
All business invariants are enforced here.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Mapping

from invtrack.domain.exceptions import ValidationError
from invtrack.domain.model.product import Product
from invtrack.domain.model.value_objects import (
    Money,
    Quantity,
    optional_text,
    require_text,
)


class OrderType(Enum):
    SALE = "sale"
    PURCHASE = "purchase"


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


ORDER_NUMBER_PREFIX = "ORD-"

MUTABLE_FIELDS = frozenset(
    {
        "type",
        "status",
        "items",
        "customer_name",
        "supplier_name",
        "order_date",
        "completed_date",
        "notes",
        "total_amount",
    }
)
IMMUTABLE_FIELDS = frozenset({"id", "order_number"})


@dataclass(frozen=True)
class OrderItem:
    """A single order line.

    ``product_name`` and ``price`` are copied from the product when the
    line is created and never follow later product edits. ``product_id``
    is a plain reference: nothing checks that the product still exists.
    """

    product_id: str
    product_name: str
    quantity: Quantity
    price: Money

    @property
    def subtotal(self) -> Money:
        return self.price * self.quantity.value

    @staticmethod
    def snapshot(product: Product, quantity: int) -> OrderItem:
        return OrderItem(
            product_id=product.id,
            product_name=product.name,
            quantity=Quantity(quantity),
            price=product.price,
        )

    def with_quantity(self, quantity: int) -> OrderItem:
        return dataclasses.replace(self, quantity=Quantity(quantity))


def merge_items(items: Iterable[OrderItem]) -> list[OrderItem]:
    """Collapse lines for the same product and price into one line.

    The first occurrence keeps its position; quantities are summed.
    """
    merged: list[OrderItem] = []
    for item in items:
        for i, existing in enumerate(merged):
            if existing.product_id == item.product_id and existing.price == item.price:
                merged[i] = dataclasses.replace(
                    existing, quantity=existing.quantity + item.quantity
                )
                break
        else:
            merged.append(item)
    return merged


@dataclass(frozen=True)
class OrderDraft:
    """Creation fields for an order (identity and number are assigned later).

    ``total_amount`` is optional; when given it must match the sum of the
    item subtotals.
    """

    type: OrderType
    items: list[OrderItem]
    status: OrderStatus = OrderStatus.PENDING
    customer_name: str | None = None
    supplier_name: str | None = None
    order_date: datetime | None = None
    completed_date: datetime | None = None
    notes: str | None = None
    total_amount: Money | Decimal | str | int | float | None = None


@dataclass
class Order:
    """Aggregate root for sale and purchase orders.

    Use ``Order.create()`` for new orders; it enforces all business
    rules. The ``__init__`` is intentionally simple so the repository can
    reconstitute persisted orders without re-validating.
    """

    id: str
    order_number: str
    type: OrderType
    status: OrderStatus
    items: list[OrderItem]
    order_date: datetime
    customer_name: str | None = None
    supplier_name: str | None = None
    completed_date: datetime | None = None
    notes: str | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_id: str,
        order_number: str,
        draft: OrderDraft,
        now: datetime,
    ) -> Order:
        """Create a new order, enforcing all invariants."""
        order = Order(
            id=order_id,
            order_number=order_number,
            type=_coerce_enum(OrderType, draft.type, "order type"),
            status=_coerce_enum(OrderStatus, draft.status, "order status"),
            items=list(draft.items),
            order_date=draft.order_date or now,
            customer_name=draft.customer_name,
            supplier_name=draft.supplier_name,
            completed_date=draft.completed_date,
            notes=draft.notes,
        )
        if order.status != OrderStatus.COMPLETED and order.completed_date is not None:
            raise ValidationError(
                f"Only completed orders carry a completed date, status is {order.status.value}"
            )
        if order.status == OrderStatus.COMPLETED and order.completed_date is None:
            order.completed_date = now

        order = order.validated()
        order._check_declared_total(draft.total_amount)
        return order

    # --- Mutation -------------------------------------------------------------

    def with_changes(self, changes: Mapping[str, Any], now: datetime) -> Order:
        """Overlay *changes* onto a copy of this order.

        Moving to COMPLETED stamps ``completed_date`` (unless the caller
        supplies one); any other status clears it.
        """
        unknown = set(changes) - MUTABLE_FIELDS - IMMUTABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown order field(s): {', '.join(sorted(unknown))}")
        frozen = set(changes) & IMMUTABLE_FIELDS
        if frozen:
            raise ValidationError(f"Cannot change order field(s): {', '.join(sorted(frozen))}")

        values = dict(changes)
        declared_total = values.pop("total_amount", None)
        if "type" in values:
            values["type"] = _coerce_enum(OrderType, values["type"], "order type")
        if "status" in values:
            values["status"] = _coerce_enum(OrderStatus, values["status"], "order status")
        if "items" in values:
            values["items"] = list(values["items"])

        updated = dataclasses.replace(self, **values)
        if updated.status == OrderStatus.COMPLETED:
            if updated.completed_date is None:
                updated.completed_date = now
        elif "completed_date" in values and values["completed_date"] is not None:
            raise ValidationError(
                f"Only completed orders carry a completed date, status is {updated.status.value}"
            )
        else:
            updated.completed_date = None

        updated = updated.validated()
        updated._check_declared_total(declared_total)
        return updated

    def change_status(self, status: OrderStatus | str, now: datetime) -> Order:
        return self.with_changes({"status": status}, now)

    def validated(self) -> Order:
        """Return a normalised copy, raising ValidationError on broken rules."""
        if not self.items:
            raise ValidationError("Order must contain at least one item")
        for item in self.items:
            if not isinstance(item, OrderItem):
                raise ValidationError(
                    f"Order items must be OrderItem, got {type(item).__name__}"
                )

        customer = optional_text(self.customer_name, "Customer name")
        supplier = optional_text(self.supplier_name, "Supplier name")
        if self.type == OrderType.SALE:
            customer = require_text(customer, "Customer name")
            if supplier is not None:
                raise ValidationError("Sale orders cannot have a supplier")
        else:
            supplier = require_text(supplier, "Supplier name")
            if customer is not None:
                raise ValidationError("Purchase orders cannot have a customer")

        return dataclasses.replace(
            self,
            customer_name=customer,
            supplier_name=supplier,
            notes=optional_text(self.notes, "Notes"),
        )

    # --- Computed properties --------------------------------------------------

    @property
    def total_amount(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.subtotal
        return result

    @property
    def counterparty(self) -> str | None:
        """Customer for sales, supplier for purchases."""
        if self.type == OrderType.SALE:
            return self.customer_name
        return self.supplier_name

    @property
    def is_pending(self) -> bool:
        return self.status == OrderStatus.PENDING

    # --- Internal helpers -----------------------------------------------------

    def _check_declared_total(self, declared: Any) -> None:
        if declared is None:
            return
        if Money.of(declared).amount != self.total_amount.amount:
            raise ValidationError(
                f"Order total {Money.of(declared)} does not match "
                f"item subtotals {self.total_amount}"
            )


def format_order_number(sequence: int) -> str:
    return f"{ORDER_NUMBER_PREFIX}{sequence:06d}"


def parse_order_number(order_number: str) -> int | None:
    """Return the sequence encoded in *order_number*, or None if foreign."""
    if not order_number.startswith(ORDER_NUMBER_PREFIX):
        return None
    digits = order_number[len(ORDER_NUMBER_PREFIX):]
    if not digits.isdigit():
        return None
    return int(digits)


def _coerce_enum(enum_cls: type[Enum], value: Any, label: str) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {label} {value!r} (expected one of: {allowed})") from exc
