"""Application service: Update Order Status use case.

Non-admin actors move an order only along the transition table.  Admins
set any status directly without stamps; that path is an operational
override and deliberately skips the table.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from marketplace.application.dto import (
    CoverLinkResolver,
    OrderDTO,
    no_cover_links,
    to_order_dto,
)
from marketplace.application.guards import require_actor, require_order, shop_owner_of
from marketplace.domain.exceptions import ConflictError
from marketplace.domain.model.order import OrderStatus, utc_now
from marketplace.domain.repository.unit_of_work import UnitOfWork
from marketplace.domain.service.transition_policy import relations_of, resolve_transition

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Callable[[], datetime] = utc_now,
        cover_links: CoverLinkResolver = no_cover_links,
    ) -> None:
        self._uow = uow
        self._clock = clock
        self._cover_links = cover_links

    def handle(self, actor_id: str, order_id: str, status: OrderStatus | str) -> OrderDTO:
        requested = status if isinstance(status, OrderStatus) else OrderStatus.parse(status)

        with self._uow as uow:
            actor = require_actor(uow, actor_id)
            order = require_order(uow, order_id)
            current = order.status

            if actor.is_admin:
                order.override_status(requested)
            else:
                relations = relations_of(actor, order, shop_owner_of(uow, order))
                milestone = resolve_transition(relations, current, requested)
                order.advance(requested, milestone, self._clock())

            if not uow.orders.update_if_status(order, expected=current):
                logger.warning(
                    "Lost status race on order %s (%s -> %s)",
                    order_id, current.value, requested.value,
                )
                raise ConflictError(f"Order {order_id} was modified concurrently")
            uow.commit()

        logger.info(
            "Order %s moved %s -> %s by %s%s",
            order_id, current.value, requested.value, actor_id,
            " (admin override)" if actor.is_admin else "",
        )
        return to_order_dto(order, self._cover_links)
