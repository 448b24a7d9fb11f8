"""Shop record as seen by the order engine.

Shops are managed elsewhere; the engine only reads the fields it needs to
validate an order and to snapshot the pickup address.
"""

from __future__ import annotations

from dataclasses import dataclass

from marketplace.domain.model.value_objects import AddressSnapshot, Money, OpeningHours


@dataclass
class Shop:
    id: str
    owner_id: str
    verified: bool
    hours: OpeningHours
    delivery_price: Money
    delivery_threshold: Money
    maximum_distance: float  # kilometres
    address: AddressSnapshot
