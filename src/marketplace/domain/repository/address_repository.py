"""Abstract read access to customers' address books."""

from __future__ import annotations

from abc import ABC, abstractmethod

from marketplace.domain.model.address import Address


class AddressRepository(ABC):

    @abstractmethod
    def get_for_user(self, address_id: str, user_id: str) -> Address | None:
        """Return the address only if it exists and belongs to *user_id*."""
