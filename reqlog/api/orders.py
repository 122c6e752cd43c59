"""Order API routes (demo endpoints exercised by the request logger)."""

from fastapi import APIRouter

from reqlog.core.exceptions import NotFoundError

router = APIRouter()

# In-memory fixture data; ids outside this set are reported as missing
ORDERS: dict[int, dict] = {
    1: {"id": 1, "status": "shipped"},
    2: {"id": 2, "status": "pending"},
}


@router.get("/{order_id}")
async def get_order(order_id: int):
    """Fetch a single order."""
    order = ORDERS.get(order_id)
    if order is None:
        raise NotFoundError("Order")
    return order


@router.post("/{order_id}")
async def update_order(order_id: int):
    """Touch an order."""
    if order_id not in ORDERS:
        raise NotFoundError("Order")
    return {"id": order_id, "updated": True}
