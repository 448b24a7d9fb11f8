"""Unit tests for the order snapshot service (pure domain, no repositories)."""

import itertools

import pytest

from marketplace.domain.exceptions import (
    EntityNotFoundError,
    ForbiddenError,
    ValidationError,
)
from marketplace.domain.model.order import OrderStatus
from marketplace.domain.model.value_objects import Money, OpeningHours
from marketplace.domain.service.order_snapshot_service import (
    OrderSnapshotService,
    minute_of_day,
)
from tests.builders import at, make_address, make_line, make_shop


def _service() -> OrderSnapshotService:
    ids = itertools.count(1)
    return OrderSnapshotService(new_line_id=lambda: f"line-{next(ids)}")


def _build(shop=None, cart=None, address="default", now=None):
    return _service().build(
        customer_id="alice",
        shop=shop or make_shop(),
        cart=[make_line()] if cart is None else cart,
        address=make_address() if address == "default" else address,
        note="no chili",
        local_now=now or at(12),
        created_at=now or at(12),
    )


class TestSnapshotHappyPath:

    def test_freezes_cart_into_line_items(self):
        order = _build(cart=[
            make_line("noodles", "Beef Noodles", "18.00", 2),
            make_line("tea", "Milk Tea", "6.50", 3),
        ])
        assert [(i.id, i.item_id, i.name, i.quantity.value, str(i.price)) for i in order.items] == [
            ("line-1", "noodles", "Beef Noodles", 2, "36.00"),
            ("line-2", "tea", "Milk Tea", 3, "19.50"),
        ]
        assert order.delivery_fee == Money.of("5.00")
        assert order.total == Money.of("60.50")
        assert order.status == OrderStatus.UNPAID
        assert order.note == "no chili"

    def test_copies_both_addresses(self):
        shop = make_shop()
        address = make_address()
        order = _build(shop=shop, address=address)
        assert order.shop_address == shop.address
        assert order.customer_address == address.snapshot


class TestOpeningHours:

    def test_minute_of_day(self):
        assert minute_of_day(at(1, 30)) == 90

    def test_open_across_midnight(self):
        shop = make_shop(hours=OpeningHours(True, 1320, 120))
        assert _build(shop=shop, now=at(1)).status == OrderStatus.UNPAID

    def test_closed_during_the_day(self):
        shop = make_shop(hours=OpeningHours(True, 1320, 120))
        with pytest.raises(ForbiddenError, match="not open"):
            _build(shop=shop, now=at(10))

    def test_closed_flag(self):
        with pytest.raises(ForbiddenError, match="not open"):
            _build(shop=make_shop(hours=OpeningHours(False, 0, 0)))


class TestCartRules:

    def test_empty_cart(self):
        with pytest.raises(ValidationError, match="Cart is empty"):
            _build(cart=[])

    def test_unavailable_item(self):
        with pytest.raises(ForbiddenError, match="not available"):
            _build(cart=[make_line(), make_line("tea", "Milk Tea", available=False)])

    def test_stockout_item(self):
        with pytest.raises(ForbiddenError, match="not available"):
            _build(cart=[make_line(stockout=True)])

    def test_below_threshold(self):
        shop = make_shop(delivery_threshold="60")
        with pytest.raises(ForbiddenError, match="below the delivery threshold"):
            _build(shop=shop, cart=[make_line(price="25.00", qty=2)])

    def test_exactly_at_threshold(self):
        shop = make_shop(delivery_threshold="60")
        order = _build(shop=shop, cart=[make_line(price="30.00", qty=2)])
        assert order.subtotal == Money.of("60")


class TestDeliveryRules:

    def test_missing_address(self):
        with pytest.raises(EntityNotFoundError, match="Address not found"):
            _build(address=None)

    def test_someone_elses_address(self):
        with pytest.raises(EntityNotFoundError, match="Address not found"):
            _build(address=make_address(user_id="bob"))

    def test_beyond_maximum_distance(self):
        with pytest.raises(ForbiddenError, match="5.20 km away"):
            _build(shop=make_shop(maximum_distance=5.0), address=make_address(km_from_shop=5.2))

    def test_within_maximum_distance(self):
        order = _build(shop=make_shop(maximum_distance=6.0), address=make_address(km_from_shop=5.2))
        assert order.status == OrderStatus.UNPAID


class TestRuleOrder:

    def test_closed_shop_reported_before_empty_cart(self):
        with pytest.raises(ForbiddenError, match="not open"):
            _build(shop=make_shop(hours=OpeningHours(False, 0, 0)), cart=[])

    def test_empty_cart_reported_before_missing_address(self):
        with pytest.raises(ValidationError):
            _build(cart=[], address=None)

    def test_threshold_reported_before_missing_address(self):
        with pytest.raises(ForbiddenError, match="threshold"):
            _build(shop=make_shop(delivery_threshold="100"), address=None)
