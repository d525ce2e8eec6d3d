"""
Canteen Console — Cart routes

Flow for "commit to stock":
  1. Reconcile the cart lines into the stock ledger (one write per item id)
  2. Clear the cart only if every write succeeded
  3. On any failure the cart is left as it was and the partial outcome is reported
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status

from canteen.cart.store import CartStore
from canteen.core.dependencies import get_cart, get_inventory, get_notifier
from canteen.core.exceptions import PersistenceError, ReconciliationError
from canteen.core.notifier import Notifier
from canteen.models.catalog import Item
from canteen.schemas.cart import CartResponse, CheckoutResponse, CommitResponse, QuantityUpdate
from canteen.stock.inventory import InventoryBook

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/cart", tags=["cart"])


def cart_response(cart: CartStore) -> CartResponse:
    return CartResponse(lines=cart.lines, total_items=cart.total_items, total_price=cart.total_price)


@router.get("", response_model=CartResponse)
async def get_cart_contents(cart: CartStore = Depends(get_cart)):
    return cart_response(cart)


@router.post("/items", response_model=CartResponse)
async def add_item(item: Item, cart: CartStore = Depends(get_cart)):
    """Add one unit of an item (a second add of the same id bumps its quantity)."""
    cart.add_to_cart(item)
    return cart_response(cart)


@router.put("/items/{item_id}", response_model=CartResponse)
async def update_item_quantity(item_id: str, payload: QuantityUpdate, cart: CartStore = Depends(get_cart)):
    cart.update_quantity(item_id, payload.quantity)
    return cart_response(cart)


@router.delete("/items/{item_id}", response_model=CartResponse)
async def remove_item(item_id: str, cart: CartStore = Depends(get_cart)):
    cart.remove_from_cart(item_id)
    return cart_response(cart)


@router.delete("", response_model=CartResponse)
async def clear_cart(cart: CartStore = Depends(get_cart)):
    cart.clear_cart()
    return cart_response(cart)


@router.post("/commit", response_model=CommitResponse)
async def commit_to_stock(
    cart: CartStore = Depends(get_cart),
    inventory: InventoryBook = Depends(get_inventory),
):
    """Add the cart's contents to the available stock, then empty the cart."""
    if not len(cart):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cart is empty.")

    try:
        written = await inventory.commit(cart.lines)
    except ReconciliationError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"message": str(e), "updated": e.updated_ids, "failed": e.failed_ids},
        )
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    cart.clear_cart()
    return CommitResponse(updated=list(written.values()), message="Items added to available stock!")


@router.post("/checkout", response_model=CheckoutResponse)
async def checkout(cart: CartStore = Depends(get_cart), notifier: Notifier = Depends(get_notifier)):
    if not len(cart):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cart is empty.")

    response = CheckoutResponse(
        total_items=cart.total_items,
        total_price=cart.total_price,
        message="Order placed successfully! Thank you for your purchase.",
    )
    cart.clear_cart()
    logger.info("Checkout: %d items, %.2f", response.total_items, response.total_price)
    await notifier.success(response.message)
    return response
