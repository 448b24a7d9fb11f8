"""Abstract unit of work.

Every use case runs inside one ``with uow:`` block.  Nothing written
through the repositories is visible outside until ``commit()``; leaving
the block without committing (including via an exception) rolls back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from marketplace.domain.repository.address_repository import AddressRepository
from marketplace.domain.repository.cart_repository import CartRepository
from marketplace.domain.repository.order_repository import OrderRepository
from marketplace.domain.repository.shop_repository import ShopRepository
from marketplace.domain.repository.user_repository import UserRepository


class UnitOfWork(ABC):

    users: UserRepository
    shops: ShopRepository
    carts: CartRepository
    addresses: AddressRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, *args) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every write of this unit of work durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted writes; a no-op after commit."""
