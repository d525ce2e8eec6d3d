"""
Canteen Console — Order analysis

Read-only reductions over an already filtered order set. Always computed
from the data passed in; nothing is cached between calls.
"""
import logging
from collections import Counter
from typing import Iterable

from pydantic import BaseModel

from canteen.models.order import Order, OrderStatus, Session
from canteen.ordering.ranking import order_hour, session_for_hour

logger = logging.getLogger(__name__)


class HourCount(BaseModel):
    hour: int
    count: int


class OrderReport(BaseModel):
    order_count: int
    status_counts: dict[OrderStatus, int]
    hourly_counts: list[HourCount]
    session_counts: dict[Session, int]
    total_revenue: float


def build_report(orders: Iterable[Order]) -> OrderReport:
    orders = list(orders)
    status_counts = Counter(order.status for order in orders)
    hours = [0] * 24
    sessions = {session: 0 for session in Session}
    revenue = 0.0

    for order in orders:
        revenue += order.total
        hour = order_hour(order)
        if hour is None:
            logger.warning("Order %s has unreadable time %r; left out of hourly counts", order.id, order.time)
            continue
        hours[hour] += 1
        sessions[session_for_hour(hour)] += 1

    return OrderReport(
        order_count=len(orders),
        status_counts={status: status_counts.get(status, 0) for status in OrderStatus},
        hourly_counts=[HourCount(hour=hour, count=count) for hour, count in enumerate(hours)],
        session_counts=sessions,
        total_revenue=revenue,
    )
