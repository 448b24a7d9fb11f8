"""Unit tests for the role-gated transition table."""

import itertools

import pytest

from marketplace.domain.exceptions import ForbiddenError
from marketplace.domain.model.actor import Actor, Role
from marketplace.domain.model.order import TERMINAL_STATUSES, Milestone, OrderStatus
from marketplace.domain.service.transition_policy import (
    TRANSITIONS,
    Relation,
    can_view_in_full,
    relations_of,
    resolve_transition,
)
from tests.builders import make_order

FORWARD = [
    OrderStatus.UNPAID,
    OrderStatus.PREPARING,
    OrderStatus.PREPARED,
    OrderStatus.DELIVERING,
    OrderStatus.FINISHED,
]


class TestRelations:

    def test_customer(self):
        assert relations_of(Actor("alice"), make_order(), "owner") == {Relation.CUSTOMER}

    def test_shop_owner(self):
        assert relations_of(Actor("owner"), make_order(), "owner") == {Relation.SHOP_OWNER}

    def test_rider(self):
        order = make_order(rider_id="bob")
        assert relations_of(Actor("bob"), order, "owner") == {Relation.RIDER}

    def test_several_relations(self):
        order = make_order(customer_id="owner")
        assert relations_of(Actor("owner"), order, "owner") == {
            Relation.CUSTOMER,
            Relation.SHOP_OWNER,
        }

    def test_stranger_has_none(self):
        assert relations_of(Actor("carol"), make_order(), "owner") == frozenset()

    def test_missing_shop_gives_no_owner(self):
        assert relations_of(Actor("owner"), make_order(), None) == frozenset()

    def test_admin_sees_everything(self):
        assert can_view_in_full(Actor("root", Role.ADMIN), frozenset())
        assert not can_view_in_full(Actor("carol"), frozenset())


class TestTransitionTable:

    @pytest.mark.parametrize(
        "relation, current, requested, milestone",
        [
            (Relation.CUSTOMER, OrderStatus.UNPAID, OrderStatus.CANCELED, Milestone.CANCELED),
            (Relation.CUSTOMER, OrderStatus.UNPAID, OrderStatus.PREPARING, Milestone.PAID),
            (Relation.SHOP_OWNER, OrderStatus.PREPARING, OrderStatus.PREPARED, Milestone.PREPARED),
            (Relation.RIDER, OrderStatus.DELIVERING, OrderStatus.FINISHED, Milestone.FINISHED),
        ],
    )
    def test_permitted_moves(self, relation, current, requested, milestone):
        assert resolve_transition(frozenset({relation}), current, requested) == milestone

    def test_table_has_exactly_four_rows(self):
        assert len(TRANSITIONS) == 4

    def test_every_row_moves_forward(self):
        for relation, current, requested in TRANSITIONS:
            if requested == OrderStatus.CANCELED:
                assert current == OrderStatus.UNPAID
            else:
                assert FORWARD.index(requested) == FORWARD.index(current) + 1

    @pytest.mark.parametrize(
        "relation, current, requested",
        [
            (Relation.SHOP_OWNER, OrderStatus.UNPAID, OrderStatus.CANCELED),
            (Relation.RIDER, OrderStatus.PREPARING, OrderStatus.PREPARED),
            (Relation.CUSTOMER, OrderStatus.PREPARING, OrderStatus.UNPAID),
            (Relation.CUSTOMER, OrderStatus.PREPARING, OrderStatus.CANCELED),
            (Relation.RIDER, OrderStatus.PREPARED, OrderStatus.DELIVERING),
            (Relation.SHOP_OWNER, OrderStatus.PREPARED, OrderStatus.PREPARING),
        ],
    )
    def test_forbidden_moves(self, relation, current, requested):
        with pytest.raises(ForbiddenError, match="not permitted"):
            resolve_transition(frozenset({relation}), current, requested)

    def test_no_relation_never_moves(self):
        for current, requested in itertools.product(OrderStatus, OrderStatus):
            with pytest.raises(ForbiddenError):
                resolve_transition(frozenset(), current, requested)

    def test_terminal_states_have_no_exits(self):
        every_relation = frozenset(Relation)
        for current in TERMINAL_STATUSES:
            for requested in OrderStatus:
                with pytest.raises(ForbiddenError):
                    resolve_transition(every_relation, current, requested)

    def test_combined_relations_use_any_matching_row(self):
        both = frozenset({Relation.CUSTOMER, Relation.SHOP_OWNER})
        assert resolve_transition(both, OrderStatus.PREPARING, OrderStatus.PREPARED) == Milestone.PREPARED
        assert resolve_transition(both, OrderStatus.UNPAID, OrderStatus.PREPARING) == Milestone.PAID
