"""Key-value-store-backed implementation of ProductRepository.

The whole product collection lives under one key. Every read decodes
the full document and every write re-encodes it.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from invtrack.domain.exceptions import ValidationError
from invtrack.domain.model.product import Product, ProductDraft
from invtrack.domain.repository.product_repository import ProductRepository
from invtrack.infrastructure.persistence.codec import decode_products, encode_products
from invtrack.infrastructure.persistence.identity import (
    Clock,
    IdFactory,
    new_id,
    unique_id,
    utc_now,
)
from invtrack.infrastructure.persistence.store import (
    PRODUCTS_KEY,
    KeyValueStore,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)


class StoreProductRepository(ProductRepository):

    def __init__(
        self,
        store: KeyValueStore,
        clock: Clock = utc_now,
        id_factory: IdFactory = new_id,
        key: str = PRODUCTS_KEY,
    ) -> None:
        self._store = store
        self._clock = clock
        self._id_factory = id_factory
        self._key = key

    # --- ProductRepository interface ------------------------------------------

    def list_all(self) -> list[Product]:
        return self._load()

    def get_by_id(self, product_id: str) -> Product | None:
        for product in self._load():
            if product.id == product_id:
                return product
        return None

    def get_by_sku(self, sku: str) -> Product | None:
        wanted = sku.strip().lower()
        for product in self._load():
            if product.sku.lower() == wanted:
                return product
        return None

    def create(self, draft: ProductDraft) -> Product:
        products = self._load()
        product_id = unique_id(self._id_factory, {p.id for p in products})
        product = Product.create(product_id, draft, self._clock())
        self._assert_sku_free(products, product)

        products.append(product)
        self._persist(products)
        logger.info("Created product %s (%s)", product.id, product.sku)
        return product

    def update(self, product_id: str, changes: Mapping[str, Any]) -> Product | None:
        products = self._load()
        for i, existing in enumerate(products):
            if existing.id == product_id:
                break
        else:
            logger.info("Product %s not found for update", product_id)
            return None

        updated = existing.with_changes(changes, self._clock())
        self._assert_sku_free(products, updated)
        products[i] = updated
        self._persist(products)
        logger.info("Updated product %s: %s", product_id, ", ".join(sorted(changes)))
        return updated

    def delete(self, product_id: str) -> bool:
        products = self._load()
        remaining = [p for p in products if p.id != product_id]
        if len(remaining) == len(products):
            return False
        self._persist(remaining)
        logger.info("Deleted product %s", product_id)
        return True

    # --- Store helpers --------------------------------------------------------

    @staticmethod
    def _assert_sku_free(products: list[Product], candidate: Product) -> None:
        for other in products:
            if other.id != candidate.id and other.sku.lower() == candidate.sku.lower():
                raise ValidationError(f"SKU '{candidate.sku}' is already in use")

    def _load(self) -> list[Product]:
        try:
            data = self._store.get(self._key)
        except StoreUnavailableError as exc:
            logger.warning("Product store unavailable, treating as empty: %s", exc)
            return []
        if data is None:
            return []
        return decode_products(data)

    def _persist(self, products: list[Product]) -> None:
        try:
            self._store.set(self._key, encode_products(products))
        except StoreUnavailableError as exc:
            logger.warning("Product store unavailable, change not saved: %s", exc)
