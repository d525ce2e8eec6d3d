"""
Canteen Console — Order management routes

The displayed list is always rank(filter(orders)):
  pending first → higher priority → earlier queue position.
Only status changes and priority boosts are written back to the store.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError

from canteen.core.dependencies import get_console
from canteen.core.exceptions import OrderNotFoundError, PersistenceError
from canteen.models.order import FilterSpec, Order, OrderStatus, Session
from canteen.ordering.console import OrderConsole
from canteen.ordering.report import OrderReport
from canteen.schemas.order import OrderListResponse, StatusUpdate

router = APIRouter(prefix="/orders", tags=["orders"])


def filter_spec(
    status_: OrderStatus | None = Query(None, alias="status"),
    start_date: str | None = Query(None, examples=["2024-03-01"]),
    end_date: str | None = Query(None, examples=["2024-03-31"]),
    session: Session | None = Query(None),
    time_range: str | None = Query(None, examples=["6-12"]),
) -> FilterSpec:
    try:
        return FilterSpec(
            status=status_,
            start_date=start_date,
            end_date=end_date,
            session=session,
            time_range=time_range,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.errors(include_url=False, include_context=False),
        )


async def _loaded(console: OrderConsole, refresh: bool = False) -> OrderConsole:
    try:
        if refresh:
            await console.refresh()
        else:
            await console.ensure_loaded()
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return console


@router.get("", response_model=OrderListResponse)
async def list_orders(
    refresh: bool = Query(False, description="Re-fetch orders from the store first"),
    spec: FilterSpec = Depends(filter_spec),
    console: OrderConsole = Depends(get_console),
):
    await _loaded(console, refresh)
    orders = console.view(spec)
    return OrderListResponse(count=len(orders), orders=orders)


@router.get("/report", response_model=OrderReport)
async def order_report(spec: FilterSpec = Depends(filter_spec), console: OrderConsole = Depends(get_console)):
    """Status, hourly and session counts plus revenue over the filtered orders."""
    await _loaded(console)
    return console.report(spec)


@router.post("/refresh", response_model=OrderListResponse)
async def refresh_orders(console: OrderConsole = Depends(get_console)):
    await _loaded(console, refresh=True)
    orders = console.view()
    return OrderListResponse(count=len(orders), orders=orders)


@router.get("/{order_id}", response_model=Order)
async def get_order(order_id: str, console: OrderConsole = Depends(get_console)):
    await _loaded(console)
    order = console.get(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found.")
    return order


@router.post("/{order_id}/priority", response_model=Order)
async def boost_priority(order_id: str, console: OrderConsole = Depends(get_console)):
    """Move an order above every order currently known to the console."""
    await _loaded(console)
    try:
        return await console.boost(order_id)
    except OrderNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.put("/{order_id}/status", response_model=Order)
async def set_order_status(order_id: str, payload: StatusUpdate, console: OrderConsole = Depends(get_console)):
    """Any status may follow any status; there is no transition table."""
    await _loaded(console)
    try:
        return await console.set_status(order_id, payload.status)
    except OrderNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
