"""Abstract repository for Order aggregate.

Status writes are compare-and-set: they only apply while the stored
status still equals the status the caller read.  A ``False`` return means
a concurrent request got there first.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from marketplace.domain.model.order import Order, OrderStatus


@dataclass(frozen=True)
class OrderQuery:
    """Filters for listing orders; ``None`` means "any"."""

    customer_id: str | None = None
    shop_id: str | None = None
    rider_id: str | None = None
    status: OrderStatus | None = None
    offset: int = 0
    limit: int = 10


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new unique order (or line item) ID."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Insert a new order with its line items, assigning an ID if missing."""

    @abstractmethod
    def update_if_status(self, order: Order, expected: OrderStatus) -> bool:
        """Persist status, rider and milestone timestamps of *order*.

        Applies only if the stored status equals *expected*.  Timestamps
        already stored are never overwritten.
        """

    @abstractmethod
    def delete_if_status(self, order_id: str, expected: OrderStatus) -> bool:
        """Delete the order and its line items if its status is *expected*."""

    @abstractmethod
    def find(self, query: OrderQuery) -> list[Order]:
        """Return matching orders, newest first."""
