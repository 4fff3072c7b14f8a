"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockflow.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def next_number(self) -> int:
        """Allocate the next order sequence number.

        Monotonic; an allocated number is never handed out again, even if
        the order that took it is never saved.
        """

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, oldest first."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order, assigning ``id`` if unset."""

    @abstractmethod
    def delete(self, order_id: int) -> None:
        """Physically remove an order and its lines."""

    @abstractmethod
    def references_product(self, product_id: str) -> bool:
        """True if any order line points at the product."""
