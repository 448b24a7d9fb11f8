"""Domain service: role-gated order status transitions.

The permitted moves are kept as a lookup table keyed by
``(relation, current status, requested status)`` so the rules can be read,
tested and extended as data.  Admins never consult the table; see
:func:`resolve_transition` callers for the override path.
"""

from __future__ import annotations

from enum import Enum

from marketplace.domain.exceptions import ForbiddenError
from marketplace.domain.model.actor import Actor
from marketplace.domain.model.order import Milestone, Order, OrderStatus


class Relation(Enum):
    """How an actor is involved in a particular order."""

    CUSTOMER = "customer"
    SHOP_OWNER = "shop_owner"
    RIDER = "rider"


TRANSITIONS: dict[tuple[Relation, OrderStatus, OrderStatus], Milestone] = {
    (Relation.CUSTOMER, OrderStatus.UNPAID, OrderStatus.CANCELED): Milestone.CANCELED,
    (Relation.CUSTOMER, OrderStatus.UNPAID, OrderStatus.PREPARING): Milestone.PAID,
    (Relation.SHOP_OWNER, OrderStatus.PREPARING, OrderStatus.PREPARED): Milestone.PREPARED,
    (Relation.RIDER, OrderStatus.DELIVERING, OrderStatus.FINISHED): Milestone.FINISHED,
}


def relations_of(actor: Actor, order: Order, shop_owner_id: str | None) -> frozenset[Relation]:
    """Every relation *actor* holds to *order* (possibly none, possibly several)."""
    relations = set()
    if order.customer_id == actor.id:
        relations.add(Relation.CUSTOMER)
    if shop_owner_id is not None and shop_owner_id == actor.id:
        relations.add(Relation.SHOP_OWNER)
    if order.rider_id is not None and order.rider_id == actor.id:
        relations.add(Relation.RIDER)
    return frozenset(relations)


def can_view_in_full(actor: Actor, relations: frozenset[Relation]) -> bool:
    return actor.is_admin or bool(relations)


def resolve_transition(
    relations: frozenset[Relation],
    current: OrderStatus,
    requested: OrderStatus,
) -> Milestone:
    """Return the milestone stamped by the move, or raise ForbiddenError."""
    for relation in sorted(relations, key=lambda r: r.value):
        milestone = TRANSITIONS.get((relation, current, requested))
        if milestone is not None:
            return milestone
    raise ForbiddenError(
        f"Transition {current.value} -> {requested.value} is not permitted"
    )
