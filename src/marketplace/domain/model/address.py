"""An entry of a customer's address book."""

from __future__ import annotations

from dataclasses import dataclass

from marketplace.domain.model.value_objects import AddressSnapshot


@dataclass
class Address:
    id: str
    user_id: str
    snapshot: AddressSnapshot
