"""Integration tests for the CreateOrder use case.

Uses in-memory fake repositories, no database.
"""

from datetime import timedelta, timezone

import pytest

from marketplace.application.create_order import CreateOrderHandler
from marketplace.application.dto import CoverLinksDTO
from marketplace.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ForbiddenError,
    UnauthorizedError,
    ValidationError,
)
from marketplace.domain.model.order import OrderStatus
from marketplace.domain.model.value_objects import Money, OpeningHours
from marketplace.domain.repository.order_repository import OrderQuery
from tests.builders import at, make_address, make_line, make_shop, make_world


def _handler(uow, now=None, **kwargs) -> CreateOrderHandler:
    return CreateOrderHandler(uow, clock=lambda: now or at(12), **kwargs)


class TestCreateOrderHappyPath:

    def test_creates_unpaid_order_with_correct_total(self):
        uow = make_world()
        dto = _handler(uow).handle("alice", "shop-1", "addr-1", "extra napkins")
        assert dto.status == "unpaid"
        assert dto.customer == "alice"
        assert dto.shop == "shop-1"
        assert dto.rider is None
        assert dto.delivery_fee == "5.00"
        assert dto.total == "41.00"
        assert dto.note == "extra napkins"
        assert dto.created_at == at(12)
        assert dto.paid_at is None and dto.canceled_at is None

    def test_persists_order_and_commits(self):
        uow = make_world()
        dto = _handler(uow).handle("alice", "shop-1", "addr-1")
        saved = uow.orders.get_by_id(dto.id)
        assert saved is not None
        assert saved.status == OrderStatus.UNPAID
        assert uow.commits == 1

    def test_line_items_carry_catalog_ids_and_frozen_prices(self):
        uow = make_world(cart=[
            make_line("noodles", "Beef Noodles", "18.00", 2),
            make_line("tea", "Milk Tea", "6.50", 1),
        ])
        dto = _handler(uow).handle("alice", "shop-1", "addr-1")
        assert [(i.id, i.name, i.quantity, i.price) for i in dto.items] == [
            ("noodles", "Beef Noodles", 2, "36.00"),
            ("tea", "Milk Tea", 1, "6.50"),
        ]
        assert dto.total == "47.50"

    def test_cover_links_resolved_per_line(self):
        uow = make_world()
        links = lambda line_id: CoverLinksDTO(f"o/{line_id}", f"t/{line_id}")
        dto = _handler(uow, cover_links=links).handle("alice", "shop-1", "addr-1")
        saved = uow.orders.get_by_id(dto.id)
        assert dto.items[0].cover == CoverLinksDTO(
            f"o/{saved.items[0].id}", f"t/{saved.items[0].id}"
        )


class TestCreateOrderCartConsumption:

    def test_cart_for_shop_is_emptied(self):
        uow = make_world()
        _handler(uow).handle("alice", "shop-1", "addr-1")
        assert uow.carts.count("alice", "shop-1") == 0

    def test_other_carts_untouched(self):
        uow = make_world()
        uow.carts.put("shop-2", make_line("pizza", "Pizza", "40.00", 1))
        uow.carts.put("shop-1", make_line("noodles", customer_id="bob"))
        _handler(uow).handle("alice", "shop-1", "addr-1")
        assert uow.carts.count("alice", "shop-2") == 1
        assert uow.carts.count("bob", "shop-1") == 1

    def test_failed_creation_keeps_cart(self):
        uow = make_world(shop=make_shop(maximum_distance=0.5))
        with pytest.raises(ForbiddenError):
            _handler(uow).handle("alice", "shop-1", "addr-1")
        assert uow.carts.count("alice", "shop-1") == 1
        assert uow.commits == 0


class TestCreateOrderPriceLock:

    def test_price_snapshot_survives_catalog_change(self):
        uow = make_world()
        dto = _handler(uow).handle("alice", "shop-1", "addr-1")

        # The catalog price changes after the order was placed.
        uow.carts.put("shop-1", make_line(price="99.99", qty=2))

        saved = uow.orders.get_by_id(dto.id)
        assert saved.items[0].price == Money.of("36.00")
        assert saved.total == Money.of("41.00")


class TestCreateOrderConcurrentCheckout:

    def _racing_handler(self, uow) -> CreateOrderHandler:
        """The clock runs after the cart is read and before it is consumed."""
        def clock():
            # A parallel checkout of the same cart commits first.
            uow.carts.clear_for_shop("alice", "shop-1")
            uow.commit()
            return at(12)
        return CreateOrderHandler(uow, clock=clock)

    def test_cart_consumed_elsewhere_is_a_conflict(self):
        uow = make_world()
        with pytest.raises(ConflictError, match="modified concurrently"):
            self._racing_handler(uow).handle("alice", "shop-1", "addr-1")
        assert uow.orders.find(OrderQuery(customer_id="alice")) == []
        assert uow.carts.count("alice", "shop-1") == 0

    def test_only_one_of_two_checkouts_wins(self):
        uow = make_world()
        _handler(uow).handle("alice", "shop-1", "addr-1")
        with pytest.raises(ValidationError, match="Cart is empty"):
            _handler(uow).handle("alice", "shop-1", "addr-1")
        assert len(uow.orders.find(OrderQuery(customer_id="alice"))) == 1


class TestCreateOrderOpeningHours:

    def test_open_after_midnight(self):
        uow = make_world(shop=make_shop(hours=OpeningHours(True, 1320, 120)))
        dto = _handler(uow, now=at(1)).handle("alice", "shop-1", "addr-1")
        assert dto.status == "unpaid"

    def test_closed_in_the_morning(self):
        uow = make_world(shop=make_shop(hours=OpeningHours(True, 1320, 120)))
        with pytest.raises(ForbiddenError, match="not open"):
            _handler(uow, now=at(10)).handle("alice", "shop-1", "addr-1")

    def test_reference_timezone_applies_to_hours(self):
        # 17:00 UTC is 01:00 at UTC+8, inside a 22:00-02:00 window.
        uow = make_world(shop=make_shop(hours=OpeningHours(True, 1320, 120)))
        handler = _handler(uow, now=at(17), reference_tz=timezone(timedelta(hours=8)))
        assert handler.handle("alice", "shop-1", "addr-1").status == "unpaid"


class TestCreateOrderValidation:

    def test_unknown_customer(self):
        with pytest.raises(UnauthorizedError):
            _handler(make_world()).handle("mallory", "shop-1", "addr-1")

    def test_unknown_shop(self):
        with pytest.raises(EntityNotFoundError, match="Shop not found"):
            _handler(make_world()).handle("alice", "shop-9", "addr-1")

    def test_unverified_shop_looks_missing(self):
        uow = make_world(shop=make_shop(verified=False))
        with pytest.raises(EntityNotFoundError, match="Shop not found"):
            _handler(uow).handle("alice", "shop-1", "addr-1")

    def test_empty_cart(self):
        with pytest.raises(ValidationError, match="Cart is empty"):
            _handler(make_world(cart=[])).handle("alice", "shop-1", "addr-1")

    def test_subtotal_below_threshold(self):
        uow = make_world(
            shop=make_shop(delivery_threshold="60"),
            cart=[make_line(price="25.00", qty=2)],
        )
        with pytest.raises(ForbiddenError, match="threshold"):
            _handler(uow).handle("alice", "shop-1", "addr-1")

    def test_subtotal_at_threshold(self):
        uow = make_world(
            shop=make_shop(delivery_threshold="60"),
            cart=[make_line(price="30.00", qty=2)],
        )
        assert _handler(uow).handle("alice", "shop-1", "addr-1").total == "65.00"

    def test_address_of_another_user(self):
        uow = make_world(addresses=[make_address(user_id="bob")])
        with pytest.raises(EntityNotFoundError, match="Address not found"):
            _handler(uow).handle("alice", "shop-1", "addr-1")

    def test_too_far(self):
        uow = make_world(
            shop=make_shop(maximum_distance=5.0),
            addresses=[make_address(km_from_shop=5.2)],
        )
        with pytest.raises(ForbiddenError, match="delivery range"):
            _handler(uow).handle("alice", "shop-1", "addr-1")

    def test_note_too_long(self):
        with pytest.raises(ValidationError, match="100 characters"):
            _handler(make_world()).handle("alice", "shop-1", "addr-1", "x" * 101)
