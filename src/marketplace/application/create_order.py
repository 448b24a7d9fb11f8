"""Application service: Create Order use case.

Orchestrates the flow between repositories and the snapshot service.
Every read, check and write happens inside one unit of work, so a
failed rule leaves the cart and the order table untouched.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from typing import Callable

from marketplace.application.dto import (
    CoverLinkResolver,
    OrderDTO,
    no_cover_links,
    to_order_dto,
)
from marketplace.application.guards import require_actor
from marketplace.domain.exceptions import ConflictError, EntityNotFoundError
from marketplace.domain.model.order import utc_now
from marketplace.domain.repository.unit_of_work import UnitOfWork
from marketplace.domain.service.order_snapshot_service import OrderSnapshotService

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Callable[[], datetime] = utc_now,
        reference_tz: tzinfo = timezone.utc,
        cover_links: CoverLinkResolver = no_cover_links,
    ) -> None:
        self._uow = uow
        self._clock = clock
        self._reference_tz = reference_tz
        self._cover_links = cover_links

    def handle(self, customer_id: str, shop_id: str, address_id: str, note: str = "") -> OrderDTO:
        """Turn the customer's cart for one shop into a new unpaid order.

        Steps:
        1. Authenticate the customer and resolve the verified shop.
        2. Let the snapshot service validate hours, cart, threshold,
           address ownership and distance, and freeze the line items.
        3. Consume the cart for this shop (every priced line must still be
           there, else ConflictError), persist the order, commit.
        """
        with self._uow as uow:
            require_actor(uow, customer_id)

            shop = uow.shops.get_by_id(shop_id)
            if shop is None or not shop.verified:
                raise EntityNotFoundError("Shop not found")

            cart = uow.carts.list_for_shop(customer_id, shop_id)
            address = uow.addresses.get_for_user(address_id, customer_id)

            now = self._clock()
            service = OrderSnapshotService(new_line_id=uow.orders.next_id)
            order = service.build(
                customer_id=customer_id,
                shop=shop,
                cart=cart,
                address=address,
                note=note,
                local_now=now.astimezone(self._reference_tz),
                created_at=now,
            )

            removed = uow.carts.clear_for_shop(customer_id, shop_id)
            if removed != len(cart):
                logger.warning(
                    "Cart of %s for shop %s changed while ordering (%d lines priced, %d removed)",
                    customer_id, shop_id, len(cart), removed,
                )
                raise ConflictError(f"Cart for shop {shop_id} was modified concurrently")
            uow.orders.add(order)
            uow.commit()

        logger.info(
            "Order %s created by %s at shop %s (total %s)",
            order.id, customer_id, shop_id, order.total,
        )
        return to_order_dto(order, self._cover_links)
