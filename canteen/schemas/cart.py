"""
Canteen Console — Cart and stock schemas
"""
from pydantic import BaseModel, Field

from canteen.models.catalog import CartLine, StockRecord


class QuantityUpdate(BaseModel):
    # Anything below 1 removes the line
    quantity: int = Field(..., examples=[3])


class CartResponse(BaseModel):
    lines: list[CartLine]
    total_items: int
    total_price: float


class CommitResponse(BaseModel):
    updated: list[StockRecord]
    message: str


class CheckoutResponse(BaseModel):
    total_items: int
    total_price: float
    message: str
