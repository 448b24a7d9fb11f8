"""Application service: List Orders use case (query).

Four scopes, each newest first and optionally filtered by status:

- ``all``: every order on the platform, admins only
- ``customer``: orders the actor placed
- ``shop``: orders of one shop, for its owner or an admin
- ``rider``: orders the actor has claimed
"""

from __future__ import annotations

from dataclasses import replace
from enum import Enum

from marketplace.application.dto import (
    CoverLinkResolver,
    OrderDTO,
    no_cover_links,
    to_order_dto,
)
from marketplace.application.guards import require_actor
from marketplace.domain.exceptions import EntityNotFoundError, ForbiddenError, ValidationError
from marketplace.domain.model.order import OrderStatus
from marketplace.domain.repository.order_repository import OrderQuery
from marketplace.domain.repository.unit_of_work import UnitOfWork

MAX_PAGE_SIZE = 100


class ListScope(Enum):
    ALL = "all"
    CUSTOMER = "customer"
    SHOP = "shop"
    RIDER = "rider"


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork, cover_links: CoverLinkResolver = no_cover_links) -> None:
        self._uow = uow
        self._cover_links = cover_links

    def handle(
        self,
        actor_id: str,
        scope: ListScope,
        shop_id: str | None = None,
        status: OrderStatus | None = None,
        page: int = 1,
        per_page: int = 10,
    ) -> list[OrderDTO]:
        if page < 1:
            raise ValidationError("Page numbers start at 1")
        if not 1 <= per_page <= MAX_PAGE_SIZE:
            raise ValidationError(f"Page size must be between 1 and {MAX_PAGE_SIZE}")

        with self._uow as uow:
            actor = require_actor(uow, actor_id)
            query = OrderQuery(status=status, offset=(page - 1) * per_page, limit=per_page)

            if scope == ListScope.ALL:
                if not actor.is_admin:
                    raise ForbiddenError("Permission denied")
            elif scope == ListScope.CUSTOMER:
                query = replace(query, customer_id=actor.id)
            elif scope == ListScope.RIDER:
                query = replace(query, rider_id=actor.id)
            else:
                if shop_id is None:
                    raise ValidationError("A shop ID is required for the shop scope")
                shop = uow.shops.get_by_id(shop_id)
                if shop is None:
                    raise EntityNotFoundError("Shop not found")
                if shop.owner_id != actor.id and not actor.is_admin:
                    raise ForbiddenError("Permission denied")
                query = replace(query, shop_id=shop_id)

            orders = uow.orders.find(query)

        return [to_order_dto(order, self._cover_links) for order in orders]
