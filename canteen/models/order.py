"""
Canteen Console — Order models

[TRANSACTIONAL DATA] orders — created by order placement, only status and
priority are ever changed from the console.
"""
from datetime import date, datetime, timezone
from enum import Enum as PyEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OrderStatus(str, PyEnum):
    PENDING = "pending"
    PAID = "paid"
    COMPLETED = "completed"


class Session(str, PyEnum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


def as_utc(value: datetime) -> datetime:
    """Naive timestamps are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class OrderItem(BaseModel):
    """Point-in-time copy of an ordered item, not a reference to the catalog."""

    name: str
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=1)


class Order(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    id: str
    order_id: str = Field("", alias="orderId")
    roll_number: str = Field("", alias="rollNumber")
    items: list[OrderItem] = Field(default_factory=list)
    total: float = 0.0
    status: OrderStatus = OrderStatus.PENDING
    priority: int = 0
    queue_position: int = Field(0, alias="queuePosition")
    date: datetime | None = None
    time: str = ""

    @field_validator("priority", "queue_position", "total", mode="before")
    @classmethod
    def _missing_as_zero(cls, value: Any) -> Any:
        return 0 if value is None or value == "" else value

    @field_validator("date", mode="before")
    @classmethod
    def _parse_store_timestamp(cls, value: Any) -> Any:
        # Document-store timestamps arrive as {"seconds": ..., "nanoseconds": ...}
        if isinstance(value, dict) and "seconds" in value:
            seconds = value["seconds"] + value.get("nanoseconds", 0) / 1_000_000_000
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        return value

    @field_validator("date")
    @classmethod
    def _normalize_date(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def _day_bound(value: Any, end: bool) -> Any:
    if isinstance(value, str) and len(value) == 10:
        value = date.fromisoformat(value)
    if isinstance(value, date) and not isinstance(value, datetime):
        bound = datetime.max.time() if end else datetime.min.time()
        return datetime.combine(value, bound, tzinfo=timezone.utc)
    return value


class FilterSpec(BaseModel):
    """
    Console filter. Every active predicate must hold (AND semantics).
    A bare date as start_date means the start of that day, as end_date the end of it.
    """

    status: OrderStatus | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    session: Session | None = None
    time_range: str | None = Field(None, pattern=r"^\d{1,2}-\d{1,2}$", examples=["6-12"])

    @field_validator("start_date", mode="before")
    @classmethod
    def _start_of_day(cls, value: Any) -> Any:
        return _day_bound(value, end=False)

    @field_validator("end_date", mode="before")
    @classmethod
    def _end_of_day(cls, value: Any) -> Any:
        return _day_bound(value, end=True)

    @field_validator("start_date", "end_date")
    @classmethod
    def _normalize_bound(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None

    @property
    def hour_window(self) -> tuple[int, int] | None:
        if not self.time_range:
            return None
        start, end = self.time_range.split("-")
        return int(start), int(end)
