"""Key-value-store-backed implementation of OrderRepository."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from invtrack.domain.model.order import (
    Order,
    OrderDraft,
    format_order_number,
    parse_order_number,
)
from invtrack.domain.repository.order_repository import OrderRepository
from invtrack.infrastructure.persistence.codec import decode_orders, encode_orders
from invtrack.infrastructure.persistence.identity import (
    Clock,
    IdFactory,
    new_id,
    unique_id,
    utc_now,
)
from invtrack.infrastructure.persistence.store import (
    ORDERS_KEY,
    KeyValueStore,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)


class StoreOrderRepository(OrderRepository):

    def __init__(
        self,
        store: KeyValueStore,
        clock: Clock = utc_now,
        id_factory: IdFactory = new_id,
        key: str = ORDERS_KEY,
    ) -> None:
        self._store = store
        self._clock = clock
        self._id_factory = id_factory
        self._key = key

    # --- OrderRepository interface --------------------------------------------

    def list_all(self) -> list[Order]:
        return self._load()

    def get_by_id(self, order_id: str) -> Order | None:
        for order in self._load():
            if order.id == order_id:
                return order
        return None

    def create(self, draft: OrderDraft) -> Order:
        orders = self._load()
        order_id = unique_id(self._id_factory, {o.id for o in orders})
        order = Order.create(
            order_id=order_id,
            order_number=self._next_order_number(orders),
            draft=draft,
            now=self._clock(),
        )

        orders.append(order)
        self._persist(orders)
        logger.info(
            "Created %s order %s (%s, total %s)",
            order.type.value, order.order_number, order.id, order.total_amount,
        )
        return order

    def update(self, order_id: str, changes: Mapping[str, Any]) -> Order | None:
        orders = self._load()
        for i, existing in enumerate(orders):
            if existing.id == order_id:
                break
        else:
            logger.info("Order %s not found for update", order_id)
            return None

        updated = existing.with_changes(changes, self._clock())
        orders[i] = updated
        self._persist(orders)
        logger.info("Updated order %s: %s", updated.order_number, ", ".join(sorted(changes)))
        return updated

    def delete(self, order_id: str) -> bool:
        orders = self._load()
        remaining = [o for o in orders if o.id != order_id]
        if len(remaining) == len(orders):
            return False
        self._persist(remaining)
        logger.info("Deleted order %s", order_id)
        return True

    # --- Store helpers --------------------------------------------------------

    @staticmethod
    def _next_order_number(orders: list[Order]) -> str:
        """One past the highest sequence in use, so live numbers never collide."""
        sequences = [parse_order_number(o.order_number) for o in orders]
        highest = max((s for s in sequences if s is not None), default=0)
        return format_order_number(highest + 1)

    def _load(self) -> list[Order]:
        try:
            data = self._store.get(self._key)
        except StoreUnavailableError as exc:
            logger.warning("Order store unavailable, treating as empty: %s", exc)
            return []
        if data is None:
            return []
        return decode_orders(data)

    def _persist(self, orders: list[Order]) -> None:
        try:
            self._store.set(self._key, encode_orders(orders))
        except StoreUnavailableError as exc:
            logger.warning("Order store unavailable, change not saved: %s", exc)
