"""Application service: Claim Order use case.

A rider takes a prepared order for delivery.  First claimer wins: the
write only lands while the stored status is still PREPARED, so a rider
who loses the race gets a ConflictError instead of a double assignment.
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
from marketplace.application.guards import require_actor, require_order
from marketplace.domain.exceptions import ConflictError
from marketplace.domain.model.order import OrderStatus, utc_now
from marketplace.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class ClaimOrderHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Callable[[], datetime] = utc_now,
        cover_links: CoverLinkResolver = no_cover_links,
    ) -> None:
        self._uow = uow
        self._clock = clock
        self._cover_links = cover_links

    def handle(self, rider_id: str, order_id: str) -> OrderDTO:
        with self._uow as uow:
            require_actor(uow, rider_id)
            order = require_order(uow, order_id)

            order.assign_rider(rider_id, self._clock())

            if not uow.orders.update_if_status(order, expected=OrderStatus.PREPARED):
                logger.warning("Rider %s lost the claim race for order %s", rider_id, order_id)
                raise ConflictError(f"Order {order_id} has already been claimed")
            uow.commit()

        logger.info("Order %s claimed by rider %s", order_id, rider_id)
        return to_order_dto(order, self._cover_links)
