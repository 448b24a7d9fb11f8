"""Output shapes handed from the use cases to the CLI and HTTP layers.

DTOs carry data between the outer layers (CLI, HTTP) and the application
layer without exposing domain internals.  ``to_wire()`` renders the JSON
shape of the REST API; money stays a two-decimal string on the DTO and
becomes a JSON number there.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from marketplace.domain.model.order import Order
from marketplace.domain.model.value_objects import AddressSnapshot


@dataclass(frozen=True)
class CoverLinksDTO:
    origin: str
    thumbnail: str


CoverLinkResolver = Callable[[str], "CoverLinksDTO | None"]


def no_cover_links(line_id: str) -> CoverLinksDTO | None:
    return None


@dataclass(frozen=True)
class AddressDTO:
    latitude: float
    longitude: float
    province: str
    city: str
    district: str
    town: str
    address: str
    name: str
    tel: str

    @staticmethod
    def from_snapshot(snapshot: AddressSnapshot) -> AddressDTO:
        return AddressDTO(
            latitude=snapshot.coordinate.latitude,
            longitude=snapshot.coordinate.longitude,
            province=snapshot.province,
            city=snapshot.city,
            district=snapshot.district,
            town=snapshot.town,
            address=snapshot.address,
            name=snapshot.name,
            tel=snapshot.tel,
        )

    def to_wire(self) -> dict:
        return {
            "coordinate": [self.latitude, self.longitude],
            "province": self.province,
            "city": self.city,
            "district": self.district,
            "town": self.town,
            "address": self.address,
            "name": self.name,
            "tel": self.tel,
        }


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item.  ``id`` is the catalog item ID."""

    id: str
    name: str
    cover: CoverLinksDTO | None
    quantity: int
    price: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order, as seen by its participants and admins."""

    id: str
    status: str
    created_at: datetime
    paid_at: datetime | None
    prepared_at: datetime | None
    delivered_at: datetime | None
    finished_at: datetime | None
    canceled_at: datetime | None
    customer: str
    shop: str
    rider: str | None
    items: list[OrderLineItemDTO]
    delivery_fee: str
    total: str
    note: str
    delivery: tuple[float, float] | None
    shop_address: AddressDTO
    customer_address: AddressDTO

    def to_wire(self) -> dict:
        return {
            "id": self.id,
            "status": self.status,
            "createdAt": _iso(self.created_at),
            "paidAt": _iso(self.paid_at),
            "preparedAt": _iso(self.prepared_at),
            "deliveredAt": _iso(self.delivered_at),
            "finishedAt": _iso(self.finished_at),
            "canceledAt": _iso(self.canceled_at),
            "customer": self.customer,
            "shop": self.shop,
            "rider": self.rider,
            "items": [
                {
                    "id": item.id,
                    "name": item.name,
                    "cover": (
                        {"origin": item.cover.origin, "thumbnail": item.cover.thumbnail}
                        if item.cover is not None
                        else None
                    ),
                    "quantity": item.quantity,
                    "price": float(item.price),
                }
                for item in self.items
            ],
            "deliveryFee": float(self.delivery_fee),
            "total": float(self.total),
            "note": self.note,
            "delivery": (
                {"latitude": self.delivery[0], "longitude": self.delivery[1]}
                if self.delivery is not None
                else None
            ),
            "shopAddress": self.shop_address.to_wire(),
            "customerAddress": self.customer_address.to_wire(),
        }


@dataclass(frozen=True)
class OmittedOrderDTO:
    """Output: the redacted view offered to riders browsing prepared orders.

    Carries no pricing, no line items and no party IDs.
    """

    id: str
    status: str
    prepared_at: datetime | None
    shop_address: AddressDTO
    customer_address: AddressDTO

    def to_wire(self) -> dict:
        return {
            "id": self.id,
            "status": self.status,
            "preparedAt": _iso(self.prepared_at),
            "shopAddress": self.shop_address.to_wire(),
            "customerAddress": self.customer_address.to_wire(),
        }


# --- Mapping ------------------------------------------------------------------


def to_order_dto(order: Order, cover_links: CoverLinkResolver = no_cover_links) -> OrderDTO:
    position = order.delivery_position
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        status=order.status.value,
        created_at=order.created_at,
        paid_at=order.paid_at,
        prepared_at=order.prepared_at,
        delivered_at=order.delivered_at,
        finished_at=order.finished_at,
        canceled_at=order.canceled_at,
        customer=order.customer_id,
        shop=order.shop_id,
        rider=order.rider_id,
        items=[
            OrderLineItemDTO(
                id=item.item_id,
                name=item.name,
                cover=cover_links(item.id),
                quantity=item.quantity.value,
                price=str(item.price),
            )
            for item in order.items
        ],
        delivery_fee=str(order.delivery_fee),
        total=str(order.total),
        note=order.note,
        delivery=(position.latitude, position.longitude) if position else None,
        shop_address=AddressDTO.from_snapshot(order.shop_address),
        customer_address=AddressDTO.from_snapshot(order.customer_address),
    )


def to_omitted_order_dto(order: Order) -> OmittedOrderDTO:
    return OmittedOrderDTO(
        id=order.id,  # type: ignore[arg-type]
        status=order.status.value,
        prepared_at=order.prepared_at,
        shop_address=AddressDTO.from_snapshot(order.shop_address),
        customer_address=AddressDTO.from_snapshot(order.customer_address),
    )


def _iso(moment: datetime | None) -> str | None:
    return moment.isoformat() if moment is not None else None
