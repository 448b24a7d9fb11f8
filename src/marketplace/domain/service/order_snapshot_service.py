"""Domain service: build an order snapshot from a shop and a cart.

All checks run before anything is built, in a fixed order, so the
first violated rule decides the error the caller sees:

  1. shop open at the reference minute-of-day
  2. cart not empty
  3. every cart line orderable (available, not out of stock)
  4. subtotal reaches the shop's delivery threshold
  5. address exists and belongs to the customer
  6. address within the shop's maximum delivery distance

Actor and shop lookups happen in the application handler before this
service is reached.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from marketplace.domain.exceptions import (
    EntityNotFoundError,
    ForbiddenError,
    ValidationError,
)
from marketplace.domain.model.address import Address
from marketplace.domain.model.cart import CartLine
from marketplace.domain.model.order import Order, OrderLineItem
from marketplace.domain.model.shop import Shop
from marketplace.domain.model.value_objects import Money


def minute_of_day(moment: datetime) -> int:
    return moment.hour * 60 + moment.minute


class OrderSnapshotService:

    def __init__(self, new_line_id: Callable[[], str]) -> None:
        self._new_line_id = new_line_id

    def build(
        self,
        customer_id: str,
        shop: Shop,
        cart: list[CartLine],
        address: Address | None,
        note: str,
        local_now: datetime,
        created_at: datetime,
    ) -> Order:
        """Validate everything, then freeze the cart into a new Order.

        *local_now* is the current time in the reference timezone used for
        the opening-hours check; *created_at* is the stored creation time.
        """
        self.ensure_open(shop, minute_of_day(local_now))
        self.ensure_cart_orderable(shop, cart)
        address = self.ensure_deliverable(customer_id, shop, address)

        line_items = [
            OrderLineItem.from_cart_line(self._new_line_id(), line) for line in cart
        ]
        order = Order.create(
            customer_id=customer_id,
            shop_id=shop.id,
            items=line_items,
            delivery_fee=shop.delivery_price,
            shop_address=shop.address,
            customer_address=address.snapshot,
            note=note,
            created_at=created_at,
        )
        return order

    # --- Individual rules -----------------------------------------------------

    @staticmethod
    def ensure_open(shop: Shop, minute: int) -> None:
        if not shop.hours.is_open_at(minute):
            raise ForbiddenError("Shop is not open")

    @staticmethod
    def ensure_cart_orderable(shop: Shop, cart: list[CartLine]) -> Money:
        if not cart:
            raise ValidationError("Cart is empty")

        for line in cart:
            if not line.orderable:
                raise ForbiddenError(f"Item '{line.name}' is not available")

        subtotal = Money.zero()
        for line in cart:
            subtotal = subtotal + line.line_total

        if subtotal < shop.delivery_threshold:
            raise ForbiddenError(
                f"Order subtotal {subtotal} is below the delivery "
                f"threshold {shop.delivery_threshold}"
            )
        return subtotal

    @staticmethod
    def ensure_deliverable(customer_id: str, shop: Shop, address: Address | None) -> Address:
        if address is None or address.user_id != customer_id:
            raise EntityNotFoundError("Address not found")

        distance = shop.address.coordinate.distance_km(address.snapshot.coordinate)
        if distance > shop.maximum_distance:
            raise ForbiddenError(
                f"Address is {distance:.2f} km away, beyond the shop's "
                f"{shop.maximum_distance:.2f} km delivery range"
            )
        return address
