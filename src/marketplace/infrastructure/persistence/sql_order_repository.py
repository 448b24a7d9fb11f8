"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import delete, func, literal, select, update
from sqlalchemy.orm import Session

from marketplace.domain.model.order import Milestone, Order, OrderLineItem, OrderStatus
from marketplace.domain.model.value_objects import AddressSnapshot, Coordinate, Money, Quantity
from marketplace.domain.repository.order_repository import OrderQuery, OrderRepository
from marketplace.infrastructure.persistence.tables import OrderItemRow, OrderRow


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> str:
        return str(uuid.uuid4())

    def get_by_id(self, order_id: str) -> Order | None:
        row = self._session.get(OrderRow, order_id)
        return self._to_domain(row) if row is not None else None

    def add(self, order: Order) -> None:
        if order.id is None:
            order.id = self.next_id()
        self._session.add(self._to_row(order))
        self._session.flush()

    def update_if_status(self, order: Order, expected: OrderStatus) -> bool:
        values: dict = {"status": order.status.value, "rider_id": order.rider_id}
        for milestone in Milestone:
            stamp = getattr(order, milestone.value)
            if stamp is not None:
                column = getattr(OrderRow, milestone.value)
                values[milestone.value] = func.coalesce(column, literal(_utc(stamp), column.type))

        result = self._session.execute(
            update(OrderRow)
            .where(OrderRow.id == order.id, OrderRow.status == expected.value)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def delete_if_status(self, order_id: str, expected: OrderStatus) -> bool:
        result = self._session.execute(
            delete(OrderRow)
            .where(OrderRow.id == order_id, OrderRow.status == expected.value)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False
        self._session.execute(
            delete(OrderItemRow)
            .where(OrderItemRow.order_id == order_id)
            .execution_options(synchronize_session=False)
        )
        return True

    def find(self, query: OrderQuery) -> list[Order]:
        stmt = select(OrderRow)
        if query.customer_id is not None:
            stmt = stmt.where(OrderRow.customer_id == query.customer_id)
        if query.shop_id is not None:
            stmt = stmt.where(OrderRow.shop_id == query.shop_id)
        if query.rider_id is not None:
            stmt = stmt.where(OrderRow.rider_id == query.rider_id)
        if query.status is not None:
            stmt = stmt.where(OrderRow.status == query.status.value)
        stmt = (
            stmt.order_by(OrderRow.created_at.desc(), OrderRow.id)
            .offset(query.offset)
            .limit(query.limit)
        )
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_row(order: Order) -> OrderRow:
        shop, customer = order.shop_address, order.customer_address
        position = order.delivery_position
        return OrderRow(
            id=order.id,
            customer_id=order.customer_id,
            shop_id=order.shop_id,
            rider_id=order.rider_id,
            status=order.status.value,
            created_at=_utc(order.created_at),
            paid_at=_utc(order.paid_at),
            prepared_at=_utc(order.prepared_at),
            delivered_at=_utc(order.delivered_at),
            finished_at=_utc(order.finished_at),
            canceled_at=_utc(order.canceled_at),
            delivery_fee=order.delivery_fee.amount,
            total=order.total.amount,
            note=order.note,
            delivery_latitude=position.latitude if position else None,
            delivery_longitude=position.longitude if position else None,
            shop_latitude=shop.coordinate.latitude,
            shop_longitude=shop.coordinate.longitude,
            shop_province=shop.province,
            shop_city=shop.city,
            shop_district=shop.district,
            shop_town=shop.town,
            shop_address=shop.address,
            shop_name=shop.name,
            shop_tel=shop.tel,
            customer_latitude=customer.coordinate.latitude,
            customer_longitude=customer.coordinate.longitude,
            customer_province=customer.province,
            customer_city=customer.city,
            customer_district=customer.district,
            customer_town=customer.town,
            customer_address=customer.address,
            customer_name=customer.name,
            customer_tel=customer.tel,
            items=[
                OrderItemRow(
                    id=item.id,
                    position=index,
                    item_id=item.item_id,
                    name=item.name,
                    quantity=item.quantity.value,
                    price=item.price.amount,
                )
                for index, item in enumerate(order.items)
            ],
        )

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        position = None
        if row.delivery_latitude is not None and row.delivery_longitude is not None:
            position = Coordinate(row.delivery_latitude, row.delivery_longitude)
        return Order(
            id=row.id,
            customer_id=row.customer_id,
            shop_id=row.shop_id,
            items=[
                OrderLineItem(
                    id=item.id,
                    item_id=item.item_id,
                    name=item.name,
                    quantity=Quantity(item.quantity),
                    price=Money.of(item.price),
                )
                for item in row.items
            ],
            delivery_fee=Money.of(row.delivery_fee),
            shop_address=AddressSnapshot(
                coordinate=Coordinate(row.shop_latitude, row.shop_longitude),
                province=row.shop_province,
                city=row.shop_city,
                district=row.shop_district,
                town=row.shop_town,
                address=row.shop_address,
                name=row.shop_name,
                tel=row.shop_tel,
            ),
            customer_address=AddressSnapshot(
                coordinate=Coordinate(row.customer_latitude, row.customer_longitude),
                province=row.customer_province,
                city=row.customer_city,
                district=row.customer_district,
                town=row.customer_town,
                address=row.customer_address,
                name=row.customer_name,
                tel=row.customer_tel,
            ),
            note=row.note,
            status=OrderStatus(row.status),
            rider_id=row.rider_id,
            delivery_position=position,
            created_at=_aware(row.created_at),
            paid_at=_aware(row.paid_at),
            prepared_at=_aware(row.prepared_at),
            delivered_at=_aware(row.delivered_at),
            finished_at=_aware(row.finished_at),
            canceled_at=_aware(row.canceled_at),
        )


def _utc(moment: datetime | None) -> datetime | None:
    return moment.astimezone(timezone.utc) if moment is not None else None


def _aware(moment: datetime | None) -> datetime | None:
    """SQLite drops tzinfo; everything is stored in UTC."""
    if moment is None or moment.tzinfo is not None:
        return moment
    return moment.replace(tzinfo=timezone.utc)
