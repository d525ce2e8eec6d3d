"""
Order console: writes go to the store first, the snapshot only advances on success.
"""
import pytest
import pytest_asyncio

from canteen.core.exceptions import OrderNotFoundError, PersistenceError
from canteen.models.order import FilterSpec, OrderStatus
from canteen.ordering.console import OrderConsole

ORDERS = "orders"


@pytest_asyncio.fixture
async def console(repository, notifier, make_order):
    for order in (
        make_order("a", priority=4, queue_position=1, time="08:00"),
        make_order("b", priority=0, queue_position=2, time="13:00"),
        make_order("c", status="paid", priority=0, queue_position=3, time="19:00"),
    ):
        await repository.set(ORDERS, order.id, order.to_document())
    console = OrderConsole(repository, notifier)
    await console.refresh()
    return console


@pytest.mark.asyncio
async def test_boost_writes_then_updates_snapshot(console, repository, notifier):
    boosted = await console.boost("b")

    assert boosted.priority == 5
    stored = {doc["id"]: doc for doc in await repository.get_all(ORDERS)}
    assert stored["b"]["priority"] == 5
    assert stored["a"]["priority"] == 4
    assert [o.id for o in console.view()] == ["b", "a", "c"]
    assert notifier.sent[-1].message == "Order priority increased"


@pytest.mark.asyncio
async def test_failed_boost_leaves_snapshot_unchanged(console, repository, notifier):
    repository.fail_ids = {"b"}

    with pytest.raises(PersistenceError):
        await console.boost("b")

    assert console.get("b").priority == 0
    assert notifier.levels()[-1] == "error"


@pytest.mark.asyncio
async def test_boost_unknown_order_writes_nothing(console, repository):
    repository.writes.clear()

    with pytest.raises(OrderNotFoundError):
        await console.boost("nope")

    assert repository.writes == []


@pytest.mark.asyncio
async def test_status_change_is_persisted(console, repository, notifier):
    updated = await console.set_status("c", OrderStatus.PENDING)

    assert updated.status == OrderStatus.PENDING
    stored = {doc["id"]: doc for doc in await repository.get_all(ORDERS)}
    assert stored["c"]["status"] == "pending"
    assert notifier.sent[-1].message == "Order marked as pending"


@pytest.mark.asyncio
async def test_report_follows_the_filter(console):
    report = console.report(FilterSpec(status="pending"))

    assert report.order_count == 2
    assert report.status_counts[OrderStatus.PAID] == 0


@pytest.mark.asyncio
async def test_refresh_failure_keeps_previous_snapshot(console, repository, notifier):
    repository.fail_reads = True

    with pytest.raises(PersistenceError):
        await console.refresh()

    assert len(console.orders) == 3
    assert notifier.sent[-1].message == "Failed to fetch orders"
