"""
Canteen Console — Stock ledger persistence

Read-then-write against the document store, no version check:
  - READ:  fetch the whole ledger
  - MERGE: reconcile() the cart lines into it (pure)
  - WRITE: one upsert per touched id, in cart order

Two clients committing the same id at the same time can lose an update
(last write wins on the computed sum). Writes are not atomic across ids: when
one fails the others still go through and nothing is rolled back. The caller
gets a ReconciliationError listing both sides.

A stored record that does not validate is never treated as absent by a
commit: its raw quantity is carried over when it is a non-negative integer,
otherwise the id is refused and reported as failed.
"""
import logging
from typing import Sequence

from pydantic import NonNegativeInt, TypeAdapter, ValidationError

from canteen.core.config import get_settings
from canteen.core.exceptions import PersistenceError, ReconciliationError
from canteen.core.notifier import Notifier
from canteen.db.repository import DocumentRepository
from canteen.models.catalog import CartLine, Item, StockRecord
from canteen.stock.reconcile import reconcile, touched_ids

settings = get_settings()
logger = logging.getLogger(__name__)

_stored_quantity = TypeAdapter(NonNegativeInt)


def _parse_ledger(docs: list[dict]) -> tuple[dict[str, StockRecord], dict[str, dict]]:
    """Split stored documents into valid records and unreadable ones, both keyed by id."""
    ledger: dict[str, StockRecord] = {}
    unreadable: dict[str, dict] = {}
    for doc in docs:
        try:
            record = StockRecord.model_validate(doc)
        except ValidationError as exc:
            logger.warning("Skipping malformed stock record %s: %s", doc.get("id"), exc.error_count())
            unreadable[str(doc.get("id"))] = doc
            continue
        ledger[record.id] = record
    return ledger, unreadable


async def load_ledger(
    repository: DocumentRepository,
    collection: str = settings.STOCK_COLLECTION,
) -> dict[str, StockRecord]:
    ledger, _ = _parse_ledger(await repository.get_all(collection))
    return ledger


def _salvage(
    ledger: dict[str, StockRecord],
    unreadable: dict[str, dict],
    lines: Sequence[CartLine],
) -> list[str]:
    """
    Put a placeholder record into `ledger` for every touched id whose stored
    document is unreadable but still holds a usable quantity. The cart line
    supplies the descriptive fields. Returns the ids that must not be written.
    """
    refused = []
    for line in lines:
        doc = unreadable.get(line.id)
        if doc is None or line.id in ledger or line.id in refused:
            continue
        try:
            quantity = _stored_quantity.validate_python(doc.get("quantity"))
        except ValidationError:
            logger.error("Stock record %s has no readable quantity, refusing to overwrite it", line.id)
            refused.append(line.id)
            continue
        ledger[line.id] = StockRecord(**line.item_fields(), quantity=quantity)
    return refused


async def load_menu(
    repository: DocumentRepository,
    collection: str = settings.MENU_COLLECTION,
) -> list[Item]:
    items = []
    for doc in await repository.get_all(collection):
        try:
            items.append(Item.model_validate(doc))
        except ValidationError as exc:
            logger.warning("Skipping malformed menu item %s: %s", doc.get("id"), exc.error_count())
    return items


async def commit_cart_to_stock(
    repository: DocumentRepository,
    lines: Sequence[CartLine],
    notifier: Notifier,
    collection: str = settings.STOCK_COLLECTION,
) -> dict[str, StockRecord]:
    """
    Merge cart lines into the stock ledger and persist the touched records.
    Returns the records that were written.

    Not idempotent: committing the same cart twice adds its quantities twice.
    """
    if not lines:
        return {}

    try:
        ledger, unreadable = _parse_ledger(await repository.get_all(collection))
    except PersistenceError as exc:
        logger.exception("Could not load stock ledger")
        await notifier.error(f"Error updating available items: {exc}")
        raise

    refused = _salvage(ledger, unreadable, lines)
    merged = reconcile(ledger, lines)
    written: dict[str, StockRecord] = {}
    failed: list[str] = []

    for item_id in touched_ids(lines):
        if item_id in refused:
            failed.append(item_id)
            continue
        record = merged[item_id]
        try:
            await repository.set(collection, item_id, record.to_document())
        except PersistenceError:
            logger.exception("Stock write failed for %s", item_id)
            failed.append(item_id)
            continue
        written[item_id] = record
        logger.info("Stock %s → %d", item_id, record.quantity)

    if failed:
        error = ReconciliationError(updated_ids=list(written), failed_ids=failed)
        await notifier.error(f"Error updating available items: {error}")
        raise error

    await notifier.success("Items added to available stock!")
    return written


async def save_stock_record(
    repository: DocumentRepository,
    record: StockRecord,
    notifier: Notifier,
    collection: str = settings.STOCK_COLLECTION,
) -> StockRecord:
    try:
        await repository.set(collection, record.id, record.to_document())
    except PersistenceError as exc:
        logger.exception("Stock write failed for %s", record.id)
        await notifier.error(f"Error updating item: {exc}")
        raise
    await notifier.success("Item updated successfully!")
    return record


async def delete_stock_record(
    repository: DocumentRepository,
    item_id: str,
    notifier: Notifier,
    collection: str = settings.STOCK_COLLECTION,
) -> None:
    try:
        await repository.delete(collection, item_id)
    except PersistenceError as exc:
        logger.exception("Stock delete failed for %s", item_id)
        await notifier.error(f"Error deleting item: {exc}")
        raise
    await notifier.success("Item deleted successfully!")
