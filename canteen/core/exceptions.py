"""
Canteen Console — Error taxonomy

Every failure is caught at the boundary of the action that triggered it,
reported through the notifier and re-raised for the caller. Nothing here is
retried automatically.
"""


class CanteenError(Exception):
    """Base class for all console errors."""


class PersistenceError(CanteenError):
    """A document repository call failed."""


class ReconciliationError(PersistenceError):
    """Raised when some ledger writes of a cart commit failed.

    Writes that already succeeded are NOT rolled back: the ledger is left
    with `updated_ids` merged and `failed_ids` untouched.
    """

    def __init__(self, updated_ids: list[str], failed_ids: list[str]):
        self.updated_ids = list(updated_ids)
        self.failed_ids = list(failed_ids)
        super().__init__(
            f"Stock commit partially failed: updated={self.updated_ids}, failed={self.failed_ids}"
        )


class OrderNotFoundError(CanteenError, LookupError):
    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"Order '{order_id}' not found.")
