"""The Order aggregate and its lifecycle vocabulary.

The Order is an aggregate root that owns its line items and the two
address snapshots.  Once created, only ``status``, ``rider_id`` and the
milestone timestamps ever change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from marketplace.domain.exceptions import ForbiddenError, ValidationError
from marketplace.domain.model.cart import CartLine
from marketplace.domain.model.value_objects import (
    AddressSnapshot,
    Coordinate,
    Money,
    Quantity,
)


class OrderStatus(Enum):
    UNPAID = "unpaid"
    PREPARING = "preparing"
    PREPARED = "prepared"
    DELIVERING = "delivering"
    FINISHED = "finished"
    CANCELED = "canceled"

    @classmethod
    def parse(cls, label: str) -> OrderStatus:
        try:
            return cls(label.strip().lower())
        except ValueError:
            raise ValidationError(f"Unknown order status: {label!r}") from None


TERMINAL_STATUSES = frozenset({OrderStatus.FINISHED, OrderStatus.CANCELED})


class Milestone(Enum):
    """Timestamp fields stamped by lifecycle transitions.

    The value is the attribute name on :class:`Order`.
    """

    PAID = "paid_at"
    PREPARED = "prepared_at"
    DELIVERED = "delivered_at"
    FINISHED = "finished_at"
    CANCELED = "canceled_at"


@dataclass(frozen=True)
class OrderLineItem:
    """One cart line frozen into an order.

    ``price`` is the line price (unit price x quantity) at order time and
    is never recalculated from the catalog.
    """

    id: str
    item_id: str
    name: str
    quantity: Quantity
    price: Money

    @staticmethod
    def from_cart_line(line_id: str, line: CartLine) -> OrderLineItem:
        return OrderLineItem(
            id=line_id,
            item_id=line.item_id,
            name=line.name,
            quantity=line.quantity,
            price=line.line_total,
        )


# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------
NOTE_MAX_LENGTH = 100


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Order:
    """Aggregate root for delivery orders.

    Use the ``Order.create()`` factory for new orders.  The ``__init__`` is
    intentionally simple so the repository can reconstitute persisted
    orders without re-validating.
    """

    id: str | None
    customer_id: str
    shop_id: str
    items: list[OrderLineItem]
    delivery_fee: Money
    shop_address: AddressSnapshot
    customer_address: AddressSnapshot
    note: str = ""
    status: OrderStatus = OrderStatus.UNPAID
    rider_id: str | None = None
    delivery_position: Coordinate | None = None
    created_at: datetime = field(default_factory=utc_now)
    paid_at: datetime | None = None
    prepared_at: datetime | None = None
    delivered_at: datetime | None = None
    finished_at: datetime | None = None
    canceled_at: datetime | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_id: str,
        shop_id: str,
        items: list[OrderLineItem],
        delivery_fee: Money,
        shop_address: AddressSnapshot,
        customer_address: AddressSnapshot,
        note: str = "",
        created_at: datetime | None = None,
    ) -> Order:
        """Create a new unpaid order, enforcing the aggregate's invariants."""
        if not items:
            raise ValidationError("Order must contain at least one item")

        note = note or ""
        if len(note) > NOTE_MAX_LENGTH:
            raise ValidationError(
                f"Note is limited to {NOTE_MAX_LENGTH} characters"
            )

        return Order(
            id=None,
            customer_id=customer_id,
            shop_id=shop_id,
            items=list(items),
            delivery_fee=delivery_fee,
            shop_address=shop_address,
            customer_address=customer_address,
            note=note,
            created_at=created_at or utc_now(),
        )

    # --- State transitions ----------------------------------------------------

    def advance(self, status: OrderStatus, milestone: Milestone, at: datetime) -> None:
        """Move to *status* and stamp *milestone* unless it is already set.

        Permission to make the move is decided by the transition policy
        before this is called.
        """
        self.status = status
        self._stamp(milestone, at)

    def override_status(self, status: OrderStatus) -> None:
        """Admin escape hatch: set the status without any checks or stamps."""
        self.status = status

    def assign_rider(self, rider_id: str, at: datetime) -> None:
        """Transition PREPARED -> DELIVERING for the claiming rider."""
        if self.status != OrderStatus.PREPARED:
            raise ForbiddenError(
                f"Order can only be claimed while prepared, "
                f"current status is {self.status.value}"
            )
        self.rider_id = rider_id
        self.advance(OrderStatus.DELIVERING, Milestone.DELIVERED, at)

    # --- Computed properties --------------------------------------------------

    @property
    def subtotal(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.price
        return result

    @property
    def total(self) -> Money:
        return self.delivery_fee + self.subtotal

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    # --- Internal helpers -----------------------------------------------------

    def _stamp(self, milestone: Milestone, at: datetime) -> None:
        if getattr(self, milestone.value) is None:
            setattr(self, milestone.value, at)
