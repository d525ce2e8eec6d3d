"""
Canteen Console — Order management console state

Holds the last order snapshot fetched from the store. Every filter request
recomputes the displayed list from that snapshot; writes go to the store
first and the snapshot only advances once they succeed.
"""
from canteen.core.config import get_settings
from canteen.core.exceptions import PersistenceError
from canteen.core.notifier import Notifier
from canteen.db import order_ops
from canteen.db.repository import DocumentRepository
from canteen.models.order import FilterSpec, Order, OrderStatus
from canteen.ordering import ranking
from canteen.ordering.report import OrderReport, build_report

settings = get_settings()


class OrderConsole:
    def __init__(
        self,
        repository: DocumentRepository,
        notifier: Notifier,
        collection: str = settings.ORDERS_COLLECTION,
    ):
        self._repository = repository
        self._notifier = notifier
        self._collection = collection
        self._orders: list[Order] = []
        self.loaded = False

    @property
    def orders(self) -> list[Order]:
        return list(self._orders)

    async def refresh(self) -> list[Order]:
        try:
            self._orders = await order_ops.load_orders(self._repository, self._collection)
        except PersistenceError:
            await self._notifier.error("Failed to fetch orders")
            raise
        self.loaded = True
        return self.orders

    async def ensure_loaded(self) -> None:
        if not self.loaded:
            await self.refresh()

    def view(self, spec: FilterSpec | None = None) -> list[Order]:
        return ranking.view(self._orders, spec or FilterSpec())

    def report(self, spec: FilterSpec | None = None) -> OrderReport:
        return build_report(ranking.filter_orders(self._orders, spec or FilterSpec()))

    def get(self, order_id: str) -> Order | None:
        return next((order for order in self._orders if order.id == order_id), None)

    async def boost(self, order_id: str) -> Order:
        self._orders = await order_ops.boost_priority(
            self._repository, self._orders, order_id, self._notifier, self._collection
        )
        return self.get(order_id)

    async def set_status(self, order_id: str, status: OrderStatus) -> Order:
        self._orders = await order_ops.change_status(
            self._repository, self._orders, order_id, status, self._notifier, self._collection
        )
        return self.get(order_id)
