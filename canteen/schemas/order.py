"""
Canteen Console — Order console schemas
"""
from pydantic import BaseModel

from canteen.models.order import Order, OrderStatus


class StatusUpdate(BaseModel):
    status: OrderStatus


class OrderListResponse(BaseModel):
    count: int
    orders: list[Order]

