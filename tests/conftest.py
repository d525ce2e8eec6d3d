"""
Shared fixtures: an in-memory document store, a notifier that records what
it was asked to show, and small factories for items and orders.
"""
from datetime import datetime, timezone

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from canteen.api import cart, health, menu, orders, stock
from canteen.core.dependencies import attach_state
from canteen.core.exceptions import PersistenceError
from canteen.core.notifier import Notification, Notifier
from canteen.db.repository import InMemoryDocumentRepository
from canteen.models.catalog import CartLine, Item
from canteen.models.order import Order


class RecordingNotifier(Notifier):
    def __init__(self):
        self.sent: list[Notification] = []

    async def publish(self, notification: Notification) -> None:
        self.sent.append(notification)

    def levels(self) -> list[str]:
        return [n.level for n in self.sent]


class FlakyRepository(InMemoryDocumentRepository):
    """In-memory store whose writes fail for chosen ids, and optionally every read."""

    def __init__(self, seed=None, fail_ids=(), fail_reads=False):
        super().__init__(seed)
        self.fail_ids = set(fail_ids)
        self.fail_reads = fail_reads
        self.writes: list[tuple[str, str]] = []

    async def get_all(self, collection):
        if self.fail_reads:
            raise PersistenceError(f"read of {collection} refused")
        return await super().get_all(collection)

    async def set(self, collection, doc_id, record):
        if doc_id in self.fail_ids:
            raise PersistenceError(f"write of {collection}/{doc_id} refused")
        self.writes.append((collection, doc_id))
        await super().set(collection, doc_id, record)

    async def delete(self, collection, doc_id):
        if doc_id in self.fail_ids:
            raise PersistenceError(f"delete of {collection}/{doc_id} refused")
        await super().delete(collection, doc_id)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def repository():
    return FlakyRepository()


@pytest.fixture
def unreadable_repository():
    return FlakyRepository(fail_reads=True)


@pytest.fixture
def make_item():
    def _make(item_id="x", name=None, price=10.0, category="lunch", image=""):
        return Item(id=item_id, name=name or f"item-{item_id}", price=price, image=image, category=category)
    return _make


@pytest.fixture
def make_line(make_item):
    def _make(item_id="x", quantity=1, **fields):
        return CartLine(**make_item(item_id, **fields).item_fields(), quantity=quantity)
    return _make


@pytest.fixture
def make_order():
    def _make(order_id, status="pending", priority=0, queue_position=0, time="10:00", date=None, total=0.0):
        return Order(
            id=order_id,
            order_id=f"ORD-{order_id}",
            roll_number="21CS001",
            status=status,
            priority=priority,
            queue_position=queue_position,
            time=time,
            date=date or datetime(2024, 3, 10, 10, 0, tzinfo=timezone.utc),
            total=total,
        )
    return _make


@pytest.fixture
def app(repository, notifier):
    application = FastAPI()
    for module in (menu, cart, stock, orders, health):
        application.include_router(module.router)
    attach_state(application, repository, notifier)
    return application


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
