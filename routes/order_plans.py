"""
Order plan API routes.

POST /api/stores/{store_id}/order-plan: shopping list to supplier plans.
"""

from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Query
import structlog

from models.order_plan import OrderPlanRequest, OrderPlanResponse
from services.order_plan_service import get_order_plan_service
from routes.supplier_alerts import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/stores/{store_id}", tags=["Order Plans"])


@router.post("/order-plan", response_model=OrderPlanResponse)
def generate_order_plan(
    store_id: str,
    data: OrderPlanRequest,
    now: Optional[datetime] = Query(
        None,
        description="Reference time (ISO 8601). Defaults to now; values without an offset are read in the store's timezone."
    ),
):
    """
    Build one order per supplier from a free-text shopping list.

    Each plan's deadline is the earliest deadline among its items. Lines
    no supplier carries, or that can't be delivered soon, come back in
    `unmatched`.
    """
    logger.info("order_plan_request", store_id=store_id, items=len(data.items))

    try:
        service = get_order_plan_service()
        return service.generate_plan(data.items, store_id, now=now)

    except Exception as e:
        return handle_error(e)
