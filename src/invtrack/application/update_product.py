"""Application service: Update Product use case."""

from __future__ import annotations

from typing import Any, Mapping

from invtrack.domain.model.product import Product
from invtrack.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, changes: Mapping[str, Any]) -> Product | None:
        """Apply a partial update; returns None if the product does not exist.

        This does NOT affect any existing orders — they captured a
        name and price snapshot at creation time.
        """
        return self._product_repo.update(product_id, changes)
