"""
Canteen Console — Inventory table state

Cached view of the stock ledger. Every write goes through the store and is
followed by a re-fetch, so the cached records always mirror the last
successful read.
"""
import logging

from canteen.core.config import get_settings
from canteen.core.exceptions import PersistenceError
from canteen.core.notifier import Notifier
from canteen.db import stock_ops
from canteen.db.repository import DocumentRepository
from canteen.models.catalog import CartLine, StockRecord

settings = get_settings()
logger = logging.getLogger(__name__)


class InventoryBook:
    def __init__(
        self,
        repository: DocumentRepository,
        notifier: Notifier,
        collection: str = settings.STOCK_COLLECTION,
    ):
        self._repository = repository
        self._notifier = notifier
        self._collection = collection
        self._records: dict[str, StockRecord] = {}

    @property
    def records(self) -> list[StockRecord]:
        return list(self._records.values())

    def get(self, item_id: str) -> StockRecord | None:
        return self._records.get(item_id)

    async def refresh(self) -> list[StockRecord]:
        try:
            self._records = await stock_ops.load_ledger(self._repository, self._collection)
        except PersistenceError as exc:
            await self._notifier.error(f"Error loading items: {exc}")
            raise
        return self.records

    async def upsert(self, record: StockRecord) -> StockRecord:
        await stock_ops.save_stock_record(self._repository, record, self._notifier, self._collection)
        await self.refresh()
        return record

    async def delete(self, item_id: str) -> None:
        await stock_ops.delete_stock_record(self._repository, item_id, self._notifier, self._collection)
        await self.refresh()

    async def commit(self, lines: list[CartLine]) -> dict[str, StockRecord]:
        """Reconcile cart lines into the ledger. The cache is refreshed even after a partial failure."""
        try:
            return await stock_ops.commit_cart_to_stock(
                self._repository, lines, self._notifier, self._collection
            )
        finally:
            try:
                await self.refresh()
            except PersistenceError:
                logger.warning("Inventory cache is stale after commit")
