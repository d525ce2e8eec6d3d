"""
Order queue: ranking, filtering, priority boost and status changes.
"""
from datetime import date, datetime, timezone

import pytest

from canteen.core.exceptions import OrderNotFoundError
from canteen.models.order import FilterSpec, OrderStatus, Session
from canteen.ordering.ranking import (
    filter_orders,
    order_hour,
    rank,
    session_for_hour,
    set_high_priority,
    update_status,
    view,
)


def ids(orders):
    return [order.id for order in orders]


def test_pending_beats_priority_then_priority_decides(make_order):
    a = make_order("A", status="pending", priority=0, queue_position=5)
    b = make_order("B", status="completed", priority=10, queue_position=1)
    c = make_order("C", status="pending", priority=3, queue_position=2)

    assert ids(rank([a, b, c])) == ["C", "A", "B"]


def test_queue_position_breaks_priority_ties(make_order):
    orders = [
        make_order("late", priority=2, queue_position=9),
        make_order("early", priority=2, queue_position=1),
        make_order("paid", status="paid", priority=0, queue_position=0),
    ]

    assert ids(rank(orders)) == ["early", "late", "paid"]


def test_non_pending_statuses_rank_together(make_order):
    orders = [
        make_order("done", status="completed", priority=1, queue_position=1),
        make_order("paid", status="paid", priority=1, queue_position=2),
        make_order("paid-hi", status="paid", priority=4, queue_position=3),
    ]

    assert ids(rank(orders)) == ["paid-hi", "done", "paid"]


def test_full_ties_keep_input_order(make_order):
    orders = [make_order(str(n), priority=1, queue_position=3) for n in range(5)]

    assert ids(rank(orders)) == ["0", "1", "2", "3", "4"]


def test_rank_does_not_reorder_its_input(make_order):
    orders = [make_order("b", queue_position=2), make_order("a", queue_position=1)]

    rank(orders)

    assert ids(orders) == ["b", "a"]


@pytest.mark.parametrize(
    "hour, expected",
    [
        (0, Session.EVENING),
        (5, Session.EVENING),
        (6, Session.MORNING),
        (11, Session.MORNING),
        (12, Session.AFTERNOON),
        (16, Session.AFTERNOON),
        (17, Session.EVENING),
        (23, Session.EVENING),
    ],
)
def test_session_boundaries(hour, expected):
    assert session_for_hour(hour) == expected


@pytest.mark.parametrize(
    "time, hour",
    [
        ("07:15", 7),
        ("7:05", 7),
        ("23:50:10", 23),
        ("07.15", 7),
        ("7 15 AM", 7),
        ("07-15", 7),
        (" 9h30", 9),
        ("", None),
        ("xx:10", None),
        ("25:00", None),
        ("123:00", None),
    ],
)
def test_order_hour_reads_the_leading_integer(make_order, time, hour):
    assert order_hour(make_order("o", time=time)) == hour


def test_morning_session_filter(make_order):
    orders = [make_order("m", time="07:15"), make_order("a", time="13:00"), make_order("e", time="23:50")]

    assert ids(filter_orders(orders, FilterSpec(session="morning"))) == ["m"]
    assert ids(filter_orders(orders, FilterSpec(session="afternoon"))) == ["a"]
    assert ids(filter_orders(orders, FilterSpec(session="evening"))) == ["e"]


def test_unreadable_time_only_fails_time_predicates(make_order):
    orders = [make_order("bad", time="soon"), make_order("ok", time="08:00")]

    assert ids(filter_orders(orders, FilterSpec())) == ["bad", "ok"]
    assert ids(filter_orders(orders, FilterSpec(session="morning"))) == ["ok"]


def test_status_filter_is_exact(make_order):
    orders = [make_order("p"), make_order("d", status="paid"), make_order("c", status="completed")]

    assert ids(filter_orders(orders, FilterSpec(status=OrderStatus.PAID))) == ["d"]


def test_date_range_is_inclusive_over_whole_days(make_order):
    orders = [
        make_order("before", date=datetime(2024, 2, 29, 23, 59, tzinfo=timezone.utc)),
        make_order("first", date=datetime(2024, 3, 1, 0, 0, tzinfo=timezone.utc)),
        make_order("last", date=datetime(2024, 3, 5, 22, 30, tzinfo=timezone.utc)),
        make_order("after", date=datetime(2024, 3, 6, 0, 0, tzinfo=timezone.utc)),
    ]
    spec = FilterSpec(start_date=date(2024, 3, 1), end_date="2024-03-05")

    assert ids(filter_orders(orders, spec)) == ["first", "last"]


def test_date_range_needs_both_bounds(make_order):
    orders = [make_order("old", date=datetime(2020, 1, 1, tzinfo=timezone.utc))]

    assert ids(filter_orders(orders, FilterSpec(start_date="2024-01-01"))) == ["old"]


def test_time_range_keeps_start_hour_excludes_end_hour(make_order):
    orders = [make_order(t, time=t) for t in ("05:59", "06:00", "11:59", "12:00")]

    assert ids(filter_orders(orders, FilterSpec(time_range="6-12"))) == ["06:00", "11:59"]


def test_predicates_combine_with_and(make_order):
    orders = [
        make_order("hit", status="pending", time="08:00"),
        make_order("wrong-status", status="paid", time="08:00"),
        make_order("wrong-session", status="pending", time="14:00"),
    ]

    assert ids(filter_orders(orders, FilterSpec(status="pending", session="morning"))) == ["hit"]


def test_view_filters_then_ranks(make_order):
    orders = [
        make_order("paid", status="paid", priority=9, time="08:00"),
        make_order("late", queue_position=3, time="09:00"),
        make_order("early", queue_position=1, time="10:00"),
        make_order("noon", queue_position=0, time="12:30"),
    ]

    assert ids(view(orders, FilterSpec(session="morning"))) == ["early", "late", "paid"]


def test_boost_assigns_max_plus_one_to_target_only(make_order):
    orders = [make_order("a", priority=4), make_order("b", priority=1), make_order("c", priority=0)]

    boosted = set_high_priority(orders, "c")

    assert [o.priority for o in boosted] == [4, 1, 5]
    assert [o.priority for o in orders] == [4, 1, 0]


def test_boost_without_priorities_starts_at_one(make_order):
    boosted = set_high_priority([make_order("a"), make_order("b")], "b")

    assert [o.priority for o in boosted] == [0, 1]


def test_boosted_order_outranks_previously_boosted(make_order):
    orders = [make_order("a", queue_position=1), make_order("b", queue_position=2)]

    orders = set_high_priority(orders, "a")
    orders = set_high_priority(orders, "b")

    assert ids(rank(orders)) == ["b", "a"]


def test_boost_unknown_order(make_order):
    with pytest.raises(OrderNotFoundError):
        set_high_priority([make_order("a")], "zzz")


def test_any_status_may_follow_any_status(make_order):
    orders = [make_order("a", status="completed"), make_order("b", status="paid")]

    updated = update_status(orders, "a", OrderStatus.PENDING)

    assert [o.status for o in updated] == [OrderStatus.PENDING, OrderStatus.PAID]
    assert orders[0].status == OrderStatus.COMPLETED


def test_status_update_unknown_order(make_order):
    with pytest.raises(OrderNotFoundError):
        update_status([make_order("a")], "zzz", OrderStatus.PAID)
