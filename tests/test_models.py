"""
Model parsing of stored documents and the ledger invariants.
"""
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from canteen.models.catalog import CartLine, Category, Item, StockRecord
from canteen.models.order import FilterSpec, Order, OrderStatus


def test_order_reads_store_document():
    order = Order.model_validate({
        "id": "doc-1",
        "orderId": 1042,
        "rollNumber": "21CS045",
        "items": [{"name": "poori", "price": 18, "quantity": 2}],
        "total": "36",
        "status": "paid",
        "priority": None,
        "date": {"seconds": 1710064800, "nanoseconds": 0},
        "time": "10:00",
    })

    assert order.order_id == "1042"
    assert order.total == 36.0
    assert order.status == OrderStatus.PAID
    assert order.priority == 0
    assert order.queue_position == 0
    assert order.date == datetime(2024, 3, 10, 10, 0, tzinfo=timezone.utc)


def test_naive_order_date_is_utc():
    order = Order(id="o", date=datetime(2024, 3, 10, 9, 30))

    assert order.date.tzinfo == timezone.utc


def test_order_document_uses_store_keys(make_order):
    doc = make_order("o", priority=2, queue_position=7).to_document()

    assert doc["orderId"] == "ORD-o"
    assert doc["queuePosition"] == 7
    assert doc["rollNumber"] == "21CS001"
    assert Order.model_validate(doc).queue_position == 7


def test_numeric_item_ids_become_strings():
    item = Item.model_validate({"id": 3, "name": "spl dosai", "price": 40, "category": "morning_food"})

    assert item.id == "3"
    assert item.category == Category.MORNING_FOOD


def test_unknown_category_is_rejected():
    with pytest.raises(ValidationError):
        Item(id="1", name="tea", price=10, category="brunch")


def test_cart_line_needs_positive_quantity(make_item):
    with pytest.raises(ValidationError):
        CartLine(**make_item("a").item_fields(), quantity=0)


def test_stock_record_cannot_go_negative(make_item):
    with pytest.raises(ValidationError):
        StockRecord(**make_item("a").item_fields(), quantity=-1)


def test_merge_refuses_a_different_id(make_line):
    record = StockRecord.from_line(make_line("a"))

    with pytest.raises(ValueError):
        record.merged_with(make_line("b"))


def test_filter_time_range_must_look_like_hours():
    assert FilterSpec(time_range="17-24").hour_window == (17, 24)
    with pytest.raises(ValidationError):
        FilterSpec(time_range="evening")
