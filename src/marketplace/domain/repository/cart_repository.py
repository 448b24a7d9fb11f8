"""Abstract repository for customers' cart lines."""

from __future__ import annotations

from abc import ABC, abstractmethod

from marketplace.domain.model.cart import CartLine


class CartRepository(ABC):

    @abstractmethod
    def list_for_shop(self, customer_id: str, shop_id: str) -> list[CartLine]:
        """Return the customer's cart lines whose item belongs to the shop."""

    @abstractmethod
    def clear_for_shop(self, customer_id: str, shop_id: str) -> int:
        """Remove every cart line of the customer for the shop.

        Returns the number of lines removed.
        """
