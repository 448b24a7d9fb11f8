"""Abstract read access to shops.

Shops are owned by the catalog side of the marketplace; the order
engine never writes them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from marketplace.domain.model.shop import Shop


class ShopRepository(ABC):

    @abstractmethod
    def get_by_id(self, shop_id: str) -> Shop | None:
        """Return a shop by its ID, or None if not found."""
