"""Application service: Add Product use case."""

from __future__ import annotations

from invtrack.domain.model.product import Product, ProductDraft
from invtrack.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, draft: ProductDraft) -> Product:
        """Add a new product to the catalog.

        Validation (required name/SKU, non-negative stock and price,
        unique SKU) happens in the domain and repository.
        """
        return self._product_repo.create(draft)
