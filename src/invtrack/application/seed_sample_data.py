"""Application service: Ensure Seed Data use case.

Fills empty collections with demonstration records on first run. Safe
to call on every startup: each collection is only seeded while it is
empty. Products and orders are written independently, so there is no
cross-collection transaction.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from invtrack.domain.model.order import OrderDraft, OrderItem, OrderStatus, OrderType
from invtrack.domain.model.product import Product, ProductDraft
from invtrack.domain.repository.order_repository import OrderRepository
from invtrack.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


SAMPLE_PRODUCTS: tuple[ProductDraft, ...] = (
    ProductDraft(
        name='Laptop Pro 15"',
        sku="LAP-001",
        category="Electronics",
        quantity=45,
        price=Decimal("89999"),
        reorder_level=10,
        supplier="Tech Supplies Inc",
        description="High-performance laptop for professionals",
    ),
    ProductDraft(
        name="Wireless Mouse",
        sku="MOU-002",
        category="Accessories",
        quantity=8,
        price=Decimal("1999"),
        reorder_level=15,
        supplier="Peripheral World",
        description="Ergonomic wireless mouse",
    ),
    ProductDraft(
        name="Office Chair",
        sku="FUR-003",
        category="Furniture",
        quantity=0,
        price=Decimal("24999"),
        reorder_level=5,
        supplier="Office Furniture Co",
        description="Ergonomic office chair with lumbar support",
    ),
    ProductDraft(
        name="USB-C Cable",
        sku="CAB-004",
        category="Accessories",
        quantity=150,
        price=Decimal("899"),
        reorder_level=50,
        supplier="Cable Masters",
        description="6ft USB-C charging cable",
    ),
)


class EnsureSeedDataHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo

    def handle(self, now: datetime | None = None) -> None:
        now = now or datetime.now(timezone.utc)

        if not self._product_repo.list_all():
            for draft in SAMPLE_PRODUCTS:
                self._product_repo.create(draft)
            logger.info("Seeded %d sample products", len(SAMPLE_PRODUCTS))

        if not self._order_repo.list_all():
            drafts = self._sample_orders(self._product_repo.list_all(), now)
            for draft in drafts:
                self._order_repo.create(draft)
            logger.info("Seeded %d sample orders", len(drafts))

    @staticmethod
    def _sample_orders(products: list[Product], now: datetime) -> list[OrderDraft]:
        """A completed sale of the first product and a pending restock of the third.

        If the product collection was seeded earlier and later edited,
        whichever products now sit in those positions are used; orders
        are skipped when too few products exist.
        """
        if len(products) < 3:
            logger.warning("Not enough products to seed sample orders")
            return []
        laptop, chair = products[0], products[2]
        return [
            OrderDraft(
                type=OrderType.SALE,
                status=OrderStatus.COMPLETED,
                items=[OrderItem.snapshot(laptop, 2)],
                customer_name="Acme Corporation",
                order_date=now - timedelta(days=2),
                completed_date=now - timedelta(days=1),
            ),
            OrderDraft(
                type=OrderType.PURCHASE,
                status=OrderStatus.PENDING,
                items=[OrderItem.snapshot(chair, 10)],
                supplier_name=chair.supplier or "Office Furniture Co",
                order_date=now,
            ),
        ]
