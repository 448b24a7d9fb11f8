"""Application service: Show Order use case (query).

Participants and admins get the full view.  Any other authenticated
actor may look at a *prepared* order only, and gets the redacted view
riders use to pick up work.
"""

from __future__ import annotations

from marketplace.application.dto import (
    CoverLinkResolver,
    OmittedOrderDTO,
    OrderDTO,
    no_cover_links,
    to_omitted_order_dto,
    to_order_dto,
)
from marketplace.application.guards import require_actor, require_order, shop_owner_of
from marketplace.domain.exceptions import ForbiddenError
from marketplace.domain.model.order import OrderStatus
from marketplace.domain.repository.unit_of_work import UnitOfWork
from marketplace.domain.service.transition_policy import can_view_in_full, relations_of


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork, cover_links: CoverLinkResolver = no_cover_links) -> None:
        self._uow = uow
        self._cover_links = cover_links

    def handle(self, actor_id: str, order_id: str) -> tuple[OrderDTO | OmittedOrderDTO, bool]:
        """Return ``(view, redacted)``."""
        with self._uow as uow:
            actor = require_actor(uow, actor_id)
            order = require_order(uow, order_id)
            relations = relations_of(actor, order, shop_owner_of(uow, order))

        if can_view_in_full(actor, relations):
            return to_order_dto(order, self._cover_links), False
        if order.status != OrderStatus.PREPARED:
            raise ForbiddenError("Permission denied")
        return to_omitted_order_dto(order), True
