"""SQLAlchemy-backed implementation of ShopRepository."""

from __future__ import annotations

from sqlalchemy.orm import Session

from marketplace.domain.model.shop import Shop
from marketplace.domain.model.value_objects import (
    AddressSnapshot,
    Coordinate,
    Money,
    OpeningHours,
)
from marketplace.domain.repository.shop_repository import ShopRepository
from marketplace.infrastructure.persistence.tables import ShopRow


class SqlShopRepository(ShopRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, shop_id: str) -> Shop | None:
        row = self._session.get(ShopRow, shop_id)
        if row is None:
            return None
        return Shop(
            id=row.id,
            owner_id=row.owner_id,
            verified=row.verified,
            hours=OpeningHours(row.opened, row.open_time_start, row.open_time_end),
            delivery_price=Money.of(row.delivery_price),
            delivery_threshold=Money.of(row.delivery_threshold),
            maximum_distance=row.maximum_distance,
            address=AddressSnapshot(
                coordinate=Coordinate(row.address_latitude, row.address_longitude),
                province=row.address_province,
                city=row.address_city,
                district=row.address_district,
                town=row.address_town,
                address=row.address_address,
                name=row.address_name,
                tel=row.address_tel,
            ),
        )
