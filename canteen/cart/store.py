"""
Canteen Console — In-memory cart

One cart per client session. Lines are keyed by item id (set semantics) and
kept in insertion order. Lines handed out are copies; nothing outside the
store holds a reference to its state.
"""
import logging

from canteen.models.catalog import CartLine, Item

logger = logging.getLogger(__name__)


class CartStore:
    def __init__(self, lines: list[CartLine] | None = None):
        self._lines: dict[str, CartLine] = {}
        for line in lines or []:
            self._lines[line.id] = line.with_quantity(line.quantity)

    def add_to_cart(self, item: Item) -> CartLine:
        """Insert the item with quantity 1, or bump the existing line by one."""
        existing = self._lines.get(item.id)
        if existing is not None:
            line = existing.with_quantity(existing.quantity + 1)
        else:
            line = CartLine(**item.item_fields(), quantity=1)
        self._lines[item.id] = line
        logger.debug("Cart: %s x%d", item.id, line.quantity)
        return line

    def remove_from_cart(self, item_id: str) -> None:
        self._lines.pop(item_id, None)

    def update_quantity(self, item_id: str, new_quantity: int) -> None:
        """Absolute set. Anything below 1 is a removal, not an error."""
        if new_quantity < 1:
            self.remove_from_cart(item_id)
            return
        existing = self._lines.get(item_id)
        if existing is not None:
            self._lines[item_id] = existing.with_quantity(new_quantity)

    def clear_cart(self) -> None:
        self._lines.clear()

    def get(self, item_id: str) -> CartLine | None:
        return self._lines.get(item_id)

    @property
    def lines(self) -> list[CartLine]:
        return [line.with_quantity(line.quantity) for line in self._lines.values()]

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    @property
    def total_price(self) -> float:
        return sum(line.price * line.quantity for line in self._lines.values())

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._lines
