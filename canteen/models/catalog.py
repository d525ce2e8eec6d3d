"""
Canteen Console — Catalog and stock ledger models

[CONFIG DATA]        menuItems      — read-only here, edited by catalog management
[TRANSACTIONAL DATA] availableItems — the stock ledger, one StockRecord per item id
"""
from enum import Enum as PyEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(str, PyEnum):
    MORNING_FOOD = "morning_food"
    LUNCH = "lunch"
    SNACKS = "snacks"
    CHOCOLATE = "chocolate"
    DRINK = "drink"


class Item(BaseModel):
    """A catalog entry. Store ids may be numeric; they are always handled as strings."""

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    id: str = Field(..., min_length=1)
    name: str
    price: float = Field(..., ge=0)
    image: str = ""
    category: Category = Category.MORNING_FOOD

    @field_validator("image", mode="before")
    @classmethod
    def _missing_image(cls, value: Any) -> Any:
        return "" if value is None else value

    def item_fields(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "image": self.image,
            "category": self.category,
        }

    def to_document(self) -> dict:
        return self.model_dump(mode="json")


class CartLine(Item):
    """An item in the cart. Zero or negative quantities never exist: they mean removal."""

    quantity: int = Field(1, ge=1)

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity

    def with_quantity(self, quantity: int) -> "CartLine":
        return CartLine(**self.item_fields(), quantity=quantity)


class StockRecord(Item):
    """
    A ledger row. Its id equals the originating item id.
    Descriptive fields follow the latest cart snapshot; quantity is additive.
    """

    quantity: int = Field(0, ge=0)

    @classmethod
    def from_line(cls, line: CartLine) -> "StockRecord":
        return cls(**line.item_fields(), quantity=line.quantity)

    def merged_with(self, line: CartLine) -> "StockRecord":
        if line.id != self.id:
            raise ValueError(f"Cannot merge line '{line.id}' into stock record '{self.id}'.")
        return StockRecord(**line.item_fields(), quantity=self.quantity + line.quantity)
