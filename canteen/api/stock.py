"""
Canteen Console — Stock (available items) routes
"""
from fastapi import APIRouter, Depends, HTTPException, status

from canteen.core.dependencies import get_inventory
from canteen.core.exceptions import PersistenceError
from canteen.models.catalog import Category, StockRecord
from canteen.stock.inventory import InventoryBook

router = APIRouter(prefix="/stock", tags=["stock"])


@router.get("", response_model=list[StockRecord])
async def list_stock(category: Category | None = None, inventory: InventoryBook = Depends(get_inventory)):
    """List the stock ledger, re-read from the store."""
    try:
        records = await inventory.refresh()
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    if category is not None:
        records = [r for r in records if r.category == category]
    return records


@router.get("/{item_id}", response_model=StockRecord)
async def get_stock(item_id: str, inventory: InventoryBook = Depends(get_inventory)):
    try:
        await inventory.refresh()
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    record = inventory.get(item_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Item not found in stock.")
    return record


@router.put("/{item_id}", response_model=StockRecord)
async def put_stock(item_id: str, record: StockRecord, inventory: InventoryBook = Depends(get_inventory)):
    """Create or replace a stock record (inventory edit)."""
    if record.id != item_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Path id and body id differ.")
    try:
        return await inventory.upsert(record)
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_stock(item_id: str, inventory: InventoryBook = Depends(get_inventory)):
    """Delete a stock record. Deleting an unknown id is not an error."""
    try:
        await inventory.delete(item_id)
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
