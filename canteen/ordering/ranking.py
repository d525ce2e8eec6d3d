"""
Canteen Console — Order queue ranking and filtering

Pure functions over order snapshots. Nothing here touches the store.

Display order is one composite key:
  1. pending before any other status
  2. higher priority first
  3. lower queue position first (earlier orders)
Python's sort is stable, so orders equal on all three keep their input order.

Filtering always runs before ranking: view = rank(filter_orders(orders, spec)).
"""
import re
from typing import Iterable, Sequence

from canteen.core.exceptions import OrderNotFoundError
from canteen.models.order import FilterSpec, Order, OrderStatus, Session

MORNING_HOURS = range(6, 12)
AFTERNOON_HOURS = range(12, 17)

_LEADING_HOUR = re.compile(r"\s*(\d{1,2})(?!\d)")


def order_hour(order: Order) -> int | None:
    """Leading integer of the `time` field ("07:15" → 7), None if unreadable."""
    match = _LEADING_HOUR.match(order.time)
    if match is None:
        return None
    hour = int(match.group(1))
    return hour if 0 <= hour < 24 else None


def session_for_hour(hour: int) -> Session:
    if hour in MORNING_HOURS:
        return Session.MORNING
    if hour in AFTERNOON_HOURS:
        return Session.AFTERNOON
    # 17:00-23:59 and 00:00-05:59
    return Session.EVENING


def rank_key(order: Order) -> tuple[bool, int, int]:
    return (order.status != OrderStatus.PENDING, -order.priority, order.queue_position)


def rank(orders: Iterable[Order]) -> list[Order]:
    return sorted(orders, key=rank_key)


def matches(order: Order, spec: FilterSpec) -> bool:
    if spec.status is not None and order.status != spec.status:
        return False

    if spec.start_date is not None and spec.end_date is not None:
        if order.date is None or not (spec.start_date <= order.date <= spec.end_date):
            return False

    window = spec.hour_window
    if spec.session is not None or window is not None:
        hour = order_hour(order)
        if hour is None:
            return False
        if spec.session is not None and session_for_hour(hour) != spec.session:
            return False
        if window is not None and not (window[0] <= hour < window[1]):
            return False

    return True


def filter_orders(orders: Iterable[Order], spec: FilterSpec) -> list[Order]:
    return [order for order in orders if matches(order, spec)]


def view(orders: Iterable[Order], spec: FilterSpec) -> list[Order]:
    return rank(filter_orders(orders, spec))


def _replace(orders: Sequence[Order], target_id: str, **changes) -> list[Order]:
    if not any(order.id == target_id for order in orders):
        raise OrderNotFoundError(target_id)
    return [
        order.model_copy(update=changes) if order.id == target_id else order
        for order in orders
    ]


def next_priority(orders: Iterable[Order]) -> int:
    return max((order.priority for order in orders), default=0) + 1


def set_high_priority(orders: Sequence[Order], target_id: str) -> list[Order]:
    """
    Give the target a priority strictly above every order in this snapshot.

    Two clients boosting from stale snapshots can compute the same value;
    only a server-assigned counter would prevent that.
    """
    return _replace(orders, target_id, priority=next_priority(orders))


def update_status(orders: Sequence[Order], target_id: str, new_status: OrderStatus) -> list[Order]:
    # No transition table: operators may move an order back to any status.
    return _replace(orders, target_id, status=OrderStatus(new_status))
