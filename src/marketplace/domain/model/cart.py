"""Cart line as seen by the order engine.

A cart line joins the customer's chosen quantity with the *current*
catalog state of the item (name, price, availability).
"""

from __future__ import annotations

from dataclasses import dataclass

from marketplace.domain.model.value_objects import Money, Quantity


@dataclass
class CartLine:
    customer_id: str
    item_id: str
    name: str
    quantity: Quantity
    unit_price: Money
    available: bool = True
    stockout: bool = False

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    @property
    def orderable(self) -> bool:
        return self.available and not self.stockout
