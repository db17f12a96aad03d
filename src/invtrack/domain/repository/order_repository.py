"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from invtrack.domain.model.order import Order, OrderDraft


class OrderRepository(ABC):

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order in insertion order (empty if none stored)."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def create(self, draft: OrderDraft) -> Order:
        """Assign an ID and order number, persist, and return the new order."""

    @abstractmethod
    def update(self, order_id: str, changes: Mapping[str, Any]) -> Order | None:
        """Merge *changes* onto an order; None if the ID is unknown."""

    @abstractmethod
    def delete(self, order_id: str) -> bool:
        """Remove an order; False if the ID is unknown."""
