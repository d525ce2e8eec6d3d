"""
Canteen Console — Order persistence (status and priority writes)

The console never creates or deletes orders. Each write upserts the full
updated order and only then is the new snapshot handed back, so a failed
write leaves the caller's snapshot exactly as it was.
"""
import logging
from typing import Sequence

from pydantic import ValidationError

from canteen.core.config import get_settings
from canteen.core.exceptions import PersistenceError
from canteen.core.notifier import Notifier
from canteen.db.repository import DocumentRepository
from canteen.models.order import Order, OrderStatus
from canteen.ordering.ranking import set_high_priority, update_status

settings = get_settings()
logger = logging.getLogger(__name__)


async def load_orders(
    repository: DocumentRepository,
    collection: str = settings.ORDERS_COLLECTION,
) -> list[Order]:
    orders = []
    for doc in await repository.get_all(collection):
        try:
            orders.append(Order.model_validate(doc))
        except ValidationError as exc:
            logger.warning("Skipping malformed order %s: %s", doc.get("id"), exc.error_count())
    return orders


async def _write_order(
    repository: DocumentRepository,
    updated: list[Order],
    order_id: str,
    collection: str,
) -> Order:
    target = next(order for order in updated if order.id == order_id)
    await repository.set(collection, order_id, target.to_document())
    return target


async def boost_priority(
    repository: DocumentRepository,
    orders: Sequence[Order],
    order_id: str,
    notifier: Notifier,
    collection: str = settings.ORDERS_COLLECTION,
) -> list[Order]:
    updated = set_high_priority(orders, order_id)
    try:
        target = await _write_order(repository, updated, order_id, collection)
    except PersistenceError:
        logger.exception("Priority update failed for order %s", order_id)
        await notifier.error("Failed to update priority")
        raise
    logger.info("Order %s boosted to priority %d", order_id, target.priority)
    await notifier.success("Order priority increased")
    return updated


async def change_status(
    repository: DocumentRepository,
    orders: Sequence[Order],
    order_id: str,
    new_status: OrderStatus,
    notifier: Notifier,
    collection: str = settings.ORDERS_COLLECTION,
) -> list[Order]:
    updated = update_status(orders, order_id, new_status)
    try:
        target = await _write_order(repository, updated, order_id, collection)
    except PersistenceError:
        logger.exception("Status update failed for order %s", order_id)
        await notifier.error("Failed to update order")
        raise
    logger.info("Order %s marked as %s", order_id, target.status.value)
    await notifier.success(f"Order marked as {target.status.value}")
    return updated
