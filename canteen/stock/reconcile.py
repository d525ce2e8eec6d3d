"""
Canteen Console — Cart → stock ledger reconciliation

Pure merge step. Quantities are additive, descriptive fields (name, price,
image, category) are overwritten by the incoming cart snapshot.

Applying the same non-empty line set twice adds its quantities twice.
Callers must run it at most once per commit intent; the cart flow clears
the cart right after a successful commit for that reason.
"""
from typing import Mapping, Sequence

from canteen.models.catalog import CartLine, StockRecord


def reconcile(
    ledger: Mapping[str, StockRecord],
    lines: Sequence[CartLine],
) -> dict[str, StockRecord]:
    """Return the ledger's next state. The input mapping is not modified."""
    merged: dict[str, StockRecord] = dict(ledger)
    for line in lines:
        current = merged.get(line.id)
        if current is None:
            merged[line.id] = StockRecord.from_line(line)
        else:
            merged[line.id] = current.merged_with(line)
    return merged


def touched_ids(lines: Sequence[CartLine]) -> list[str]:
    """Distinct ids in first-seen order."""
    return list(dict.fromkeys(line.id for line in lines))
