"""SQLAlchemy-backed implementation of AddressRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from marketplace.domain.model.address import Address
from marketplace.domain.model.value_objects import AddressSnapshot, Coordinate
from marketplace.domain.repository.address_repository import AddressRepository
from marketplace.infrastructure.persistence.tables import AddressRow


class SqlAddressRepository(AddressRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_for_user(self, address_id: str, user_id: str) -> Address | None:
        row = self._session.scalars(
            select(AddressRow).where(AddressRow.id == address_id, AddressRow.user_id == user_id)
        ).first()
        if row is None:
            return None
        return Address(
            id=row.id,
            user_id=row.user_id,
            snapshot=AddressSnapshot(
                coordinate=Coordinate(row.latitude, row.longitude),
                province=row.province,
                city=row.city,
                district=row.district,
                town=row.town,
                address=row.detail,
                name=row.recipient_name,
                tel=row.phone_number,
            ),
        )
