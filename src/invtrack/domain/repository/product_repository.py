"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations live in the infrastructure
layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from invtrack.domain.model.product import Product, ProductDraft


class ProductRepository(ABC):

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in insertion order (empty if none stored)."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> Product | None:
        """Return a product by SKU (case-insensitive), or None if not found."""

    @abstractmethod
    def create(self, draft: ProductDraft) -> Product:
        """Assign an ID and timestamps, persist, and return the new product."""

    @abstractmethod
    def update(self, product_id: str, changes: Mapping[str, Any]) -> Product | None:
        """Merge *changes* onto a product; None if the ID is unknown."""

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        """Remove a product; False if the ID is unknown."""
