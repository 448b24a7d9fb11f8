"""Lookups shared by the order use cases."""

from __future__ import annotations

from marketplace.domain.exceptions import EntityNotFoundError, UnauthorizedError
from marketplace.domain.model.actor import Actor
from marketplace.domain.model.order import Order
from marketplace.domain.repository.unit_of_work import UnitOfWork


def require_actor(uow: UnitOfWork, actor_id: str) -> Actor:
    actor = uow.users.get_by_id(actor_id)
    if actor is None:
        raise UnauthorizedError("Unauthorized")
    return actor


def require_order(uow: UnitOfWork, order_id: str) -> Order:
    order = uow.orders.get_by_id(order_id)
    if order is None:
        raise EntityNotFoundError(f"Order {order_id} not found")
    return order


def shop_owner_of(uow: UnitOfWork, order: Order) -> str | None:
    shop = uow.shops.get_by_id(order.shop_id)
    return shop.owner_id if shop is not None else None
