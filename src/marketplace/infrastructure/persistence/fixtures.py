"""Load marketplace records from a JSON fixture file.

The fixture mirrors what the catalog side of the marketplace would have
written: users, shops, items, addresses and cart lines.  Used to seed a
local database for manual runs of the CLI.

Example::

    {
      "users": [{"id": "u1", "role": "user"}],
      "shops": [{"id": "s1", "owner_id": "u2", "verified": true, ...}],
      "items": [{"id": "i1", "shop_id": "s1", "name": "Noodles", "price": "18.00"}],
      "addresses": [{"id": "a1", "user_id": "u1", "latitude": 31.2, ...}],
      "cart_items": [{"customer_id": "u1", "item_id": "i1", "quantity": 2}]
    }
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from sqlalchemy.orm import Session

from marketplace.infrastructure.persistence.tables import (
    AddressRow,
    CartItemRow,
    ItemRow,
    ShopRow,
    UserRow,
)

_MONEY_FIELDS = {"price", "delivery_price", "delivery_threshold"}


def load_fixture(session: Session, file_path: Path) -> dict[str, int]:
    """Upsert every record of *file_path*; return a count per section."""
    raw = json.loads(file_path.read_text(encoding="utf-8"))
    counts: dict[str, int] = {}

    # Parents before children so foreign keys resolve.
    for section, row_type in (
        ("users", UserRow),
        ("shops", ShopRow),
        ("items", ItemRow),
        ("addresses", AddressRow),
        ("cart_items", CartItemRow),
    ):
        records = raw.get(section, [])
        for record in records:
            session.merge(row_type(**_coerce(record)))
        session.flush()
        counts[section] = len(records)

    return counts


def _coerce(record: dict) -> dict:
    return {
        key: Decimal(str(value)) if key in _MONEY_FIELDS else value
        for key, value in record.items()
    }
