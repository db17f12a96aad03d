"""JSON encoding of the product and order collections.

Each collection is stored as one JSON array using camelCase keys. Money
is written as a decimal string; numbers are accepted on read as well.
``subtotal`` and ``totalAmount`` are written for anyone inspecting the
raw document but always recomputed on read.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone

from invtrack.domain.exceptions import DomainException, StorageDecodeError
from invtrack.domain.model.order import Order, OrderItem, OrderStatus, OrderType
from invtrack.domain.model.product import Product
from invtrack.domain.model.value_objects import Money, Quantity


# --- Collections --------------------------------------------------------------


def encode_products(products: list[Product]) -> bytes:
    return _dump([product_to_raw(p) for p in products])


def decode_products(data: bytes) -> list[Product]:
    return [_decode_record(raw, product_from_raw, "product") for raw in _load(data, "products")]


def encode_orders(orders: list[Order]) -> bytes:
    return _dump([order_to_raw(o) for o in orders])


def decode_orders(data: bytes) -> list[Order]:
    return [_decode_record(raw, order_from_raw, "order") for raw in _load(data, "orders")]


# --- Product ------------------------------------------------------------------


def product_to_raw(product: Product) -> dict:
    raw = {
        "id": product.id,
        "name": product.name,
        "sku": product.sku,
        "category": product.category,
        "quantity": product.quantity,
        "price": str(product.price.amount),
        "reorderLevel": product.reorder_level,
        "supplier": product.supplier,
        "createdAt": product.created_at.isoformat(),
        "updatedAt": product.updated_at.isoformat(),
    }
    if product.description is not None:
        raw["description"] = product.description
    return raw


def product_from_raw(raw: dict) -> Product:
    product = Product(
        id=_str(raw["id"]),
        name=_str(raw["name"]),
        sku=_str(raw["sku"]),
        category=_str(raw.get("category", "")),
        supplier=_str(raw.get("supplier", "")),
        quantity=_int(raw["quantity"]),
        price=_money(raw["price"]),
        reorder_level=_int(raw.get("reorderLevel", 0)),
        description=raw.get("description"),
        created_at=_timestamp(raw["createdAt"]),
        updated_at=_timestamp(raw["updatedAt"]),
    )
    return product.validated()


# --- Order --------------------------------------------------------------------


def order_to_raw(order: Order) -> dict:
    raw = {
        "id": order.id,
        "orderNumber": order.order_number,
        "type": order.type.value,
        "status": order.status.value,
        "items": [
            {
                "productId": item.product_id,
                "productName": item.product_name,
                "quantity": item.quantity.value,
                "price": str(item.price.amount),
                "subtotal": str(item.subtotal.amount),
            }
            for item in order.items
        ],
        "totalAmount": str(order.total_amount.amount),
        "orderDate": order.order_date.isoformat(),
    }
    optional = {
        "customerName": order.customer_name,
        "supplierName": order.supplier_name,
        "completedDate": order.completed_date.isoformat() if order.completed_date else None,
        "notes": order.notes,
    }
    raw.update({k: v for k, v in optional.items() if v is not None})
    return raw


def order_from_raw(raw: dict) -> Order:
    items = [
        OrderItem(
            product_id=_str(i["productId"]),
            product_name=_str(i["productName"]),
            quantity=Quantity(_int(i["quantity"])),
            price=_money(i["price"]),
        )
        for i in raw["items"]
    ]
    completed = raw.get("completedDate")
    order = Order(
        id=_str(raw["id"]),
        order_number=_str(raw["orderNumber"]),
        type=OrderType(raw["type"]),
        status=OrderStatus(raw["status"]),
        items=items,
        order_date=_timestamp(raw["orderDate"]),
        customer_name=raw.get("customerName"),
        supplier_name=raw.get("supplierName"),
        completed_date=_timestamp(completed) if completed else None,
        notes=raw.get("notes"),
    )
    return order.validated()


# --- Helpers ------------------------------------------------------------------


def _dump(records: list[dict]) -> bytes:
    return (json.dumps(records, indent=2) + "\n").encode("utf-8")


def _load(data: bytes, label: str) -> list[dict]:
    try:
        records = json.loads(data.decode("utf-8"))
    except ValueError as exc:
        raise StorageDecodeError(f"Stored {label} are not valid JSON: {exc}") from exc
    if not isinstance(records, list):
        raise StorageDecodeError(
            f"Stored {label} must be a JSON array, got {type(records).__name__}"
        )
    return records


def _decode_record(raw: object, decode, label: str):
    if not isinstance(raw, dict):
        raise StorageDecodeError(f"Stored {label} must be an object, got {type(raw).__name__}")
    try:
        return decode(raw)
    except KeyError as exc:
        raise StorageDecodeError(
            f"Stored {label} {raw.get('id', '?')!r} is missing field {exc}"
        ) from exc
    except (TypeError, ValueError, DomainException) as exc:
        raise StorageDecodeError(
            f"Stored {label} {raw.get('id', '?')!r} is malformed: {exc}"
        ) from exc


def _str(value: object) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected text, got {type(value).__name__}")
    return value


def _int(value: object) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    return value


def _money(value: object) -> Money:
    if isinstance(value, (int, float, str)) and not isinstance(value, bool):
        return Money.of(value)
    raise TypeError(f"expected an amount, got {value!r}")


def _timestamp(value: object) -> datetime:
    text = _str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
