"""SQLAlchemy-backed implementation of CartRepository."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from marketplace.domain.model.cart import CartLine
from marketplace.domain.model.value_objects import Money, Quantity
from marketplace.domain.repository.cart_repository import CartRepository
from marketplace.infrastructure.persistence.tables import CartItemRow, ItemRow


class SqlCartRepository(CartRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_for_shop(self, customer_id: str, shop_id: str) -> list[CartLine]:
        stmt = (
            select(CartItemRow)
            .join(CartItemRow.item)
            .where(CartItemRow.customer_id == customer_id, ItemRow.shop_id == shop_id)
            .order_by(ItemRow.name, ItemRow.id)
        )
        return [
            CartLine(
                customer_id=row.customer_id,
                item_id=row.item_id,
                name=row.item.name,
                quantity=Quantity(row.quantity),
                unit_price=Money.of(row.item.price),
                available=row.item.available,
                stockout=row.item.stockout,
            )
            for row in self._session.scalars(stmt).unique()
        ]

    def clear_for_shop(self, customer_id: str, shop_id: str) -> int:
        shop_items = select(ItemRow.id).where(ItemRow.shop_id == shop_id)
        result = self._session.execute(
            delete(CartItemRow)
            .where(
                CartItemRow.customer_id == customer_id,
                CartItemRow.item_id.in_(shop_items),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
