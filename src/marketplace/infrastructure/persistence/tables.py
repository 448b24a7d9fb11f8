"""SQLAlchemy table mappings.

Users, shops, items, carts and addresses belong to the rest of the
marketplace; they are mapped here so the engine can read them (and clear
carts) inside the same transaction as its own order tables.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

MONEY = Numeric(12, 2, asdecimal=True)


class Base(DeclarativeBase):
    pass


class UserRow(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default="user")


class ShopRow(Base):
    __tablename__ = "shops"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    owner_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    opened: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    open_time_start: Mapped[int] = mapped_column(Integer, nullable=False)
    open_time_end: Mapped[int] = mapped_column(Integer, nullable=False)
    delivery_threshold: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    delivery_price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    maximum_distance: Mapped[float] = mapped_column(Float, nullable=False)
    address_latitude: Mapped[float] = mapped_column(Float, nullable=False)
    address_longitude: Mapped[float] = mapped_column(Float, nullable=False)
    address_province: Mapped[str] = mapped_column(String(64), nullable=False)
    address_city: Mapped[str] = mapped_column(String(64), nullable=False)
    address_district: Mapped[str] = mapped_column(String(64), nullable=False)
    address_town: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    address_address: Mapped[str] = mapped_column(String(255), nullable=False)
    address_name: Mapped[str] = mapped_column(String(64), nullable=False)
    address_tel: Mapped[str] = mapped_column(String(32), nullable=False)


class ItemRow(Base):
    __tablename__ = "items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    shop_id: Mapped[str] = mapped_column(ForeignKey("shops.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    stockout: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class CartItemRow(Base):
    __tablename__ = "cart_items"

    customer_id: Mapped[str] = mapped_column(ForeignKey("users.id"), primary_key=True)
    item_id: Mapped[str] = mapped_column(ForeignKey("items.id"), primary_key=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    item: Mapped[ItemRow] = relationship(lazy="joined")


class AddressRow(Base):
    __tablename__ = "addresses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    province: Mapped[str] = mapped_column(String(64), nullable=False)
    city: Mapped[str] = mapped_column(String(64), nullable=False)
    district: Mapped[str] = mapped_column(String(64), nullable=False)
    town: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    detail: Mapped[str] = mapped_column(String(255), nullable=False)
    recipient_name: Mapped[str] = mapped_column(String(64), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(32), nullable=False)


class OrderRow(Base):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    customer_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    shop_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    rider_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    paid_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    prepared_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    delivered_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    finished_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    canceled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    delivery_fee: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    total: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    note: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    delivery_latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    delivery_longitude: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Denormalized at creation time; never re-joined with shops/addresses.
    shop_latitude: Mapped[float] = mapped_column(Float, nullable=False)
    shop_longitude: Mapped[float] = mapped_column(Float, nullable=False)
    shop_province: Mapped[str] = mapped_column(String(64), nullable=False)
    shop_city: Mapped[str] = mapped_column(String(64), nullable=False)
    shop_district: Mapped[str] = mapped_column(String(64), nullable=False)
    shop_town: Mapped[str] = mapped_column(String(64), nullable=False)
    shop_address: Mapped[str] = mapped_column(String(255), nullable=False)
    shop_name: Mapped[str] = mapped_column(String(64), nullable=False)
    shop_tel: Mapped[str] = mapped_column(String(32), nullable=False)
    customer_latitude: Mapped[float] = mapped_column(Float, nullable=False)
    customer_longitude: Mapped[float] = mapped_column(Float, nullable=False)
    customer_province: Mapped[str] = mapped_column(String(64), nullable=False)
    customer_city: Mapped[str] = mapped_column(String(64), nullable=False)
    customer_district: Mapped[str] = mapped_column(String(64), nullable=False)
    customer_town: Mapped[str] = mapped_column(String(64), nullable=False)
    customer_address: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_name: Mapped[str] = mapped_column(String(64), nullable=False)
    customer_tel: Mapped[str] = mapped_column(String(32), nullable=False)

    items: Mapped[list[OrderItemRow]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="OrderItemRow.position",
    )


class OrderItemRow(Base):
    __tablename__ = "order_items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    order_id: Mapped[str] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # No foreign key: the catalog item may be deleted, the line survives.
    item_id: Mapped[str] = mapped_column(String(36), nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)

    order: Mapped[OrderRow] = relationship(back_populates="items")
