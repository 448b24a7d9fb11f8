"""Application service: Delete Order use case.

Only the customer who placed the order may delete it, and only once it
has been canceled.
"""

from __future__ import annotations

import logging

from marketplace.application.guards import require_actor, require_order
from marketplace.domain.exceptions import ConflictError, ForbiddenError
from marketplace.domain.model.order import OrderStatus
from marketplace.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class DeleteOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor_id: str, order_id: str) -> None:
        with self._uow as uow:
            require_actor(uow, actor_id)
            order = require_order(uow, order_id)

            if order.customer_id != actor_id or order.status != OrderStatus.CANCELED:
                raise ForbiddenError("Permission denied")

            if not uow.orders.delete_if_status(order_id, expected=OrderStatus.CANCELED):
                raise ConflictError(f"Order {order_id} was modified concurrently")
            uow.commit()

        logger.info("Order %s deleted by %s", order_id, actor_id)
