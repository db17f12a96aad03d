"""Application service: Delete Product use case.

Orders referencing the product are left untouched; their lines keep
the product ID, name and price they were created with.
"""

from __future__ import annotations

from invtrack.domain.repository.product_repository import ProductRepository


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> bool:
        return self._product_repo.delete(product_id)
