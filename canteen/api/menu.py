"""
Canteen Console — Menu routes (read-only catalog)
"""
from fastapi import APIRouter, Depends, HTTPException, status

from canteen.cart.store import CartStore
from canteen.core.dependencies import get_cart, get_notifier, get_repository
from canteen.core.exceptions import PersistenceError
from canteen.core.notifier import Notifier
from canteen.db.repository import DocumentRepository
from canteen.db.stock_ops import load_menu
from canteen.models.catalog import Category, Item
from canteen.schemas.cart import CartResponse
from canteen.api.cart import cart_response

router = APIRouter(prefix="/menu", tags=["menu"])


@router.get("", response_model=list[Item])
async def list_menu(
    category: Category | None = None,
    repository: DocumentRepository = Depends(get_repository),
    notifier: Notifier = Depends(get_notifier),
):
    try:
        items = await load_menu(repository)
    except PersistenceError as e:
        await notifier.error("Error loading menu items")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    if category is not None:
        items = [item for item in items if item.category == category]
    return items


@router.post("/{item_id}/cart", response_model=CartResponse)
async def add_menu_item_to_cart(
    item_id: str,
    repository: DocumentRepository = Depends(get_repository),
    cart: CartStore = Depends(get_cart),
    notifier: Notifier = Depends(get_notifier),
):
    try:
        items = await load_menu(repository)
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    item = next((i for i in items if i.id == item_id), None)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu item not found.")

    cart.add_to_cart(item)
    await notifier.success(f"{item.name} added to cart!")
    return cart_response(cart)
