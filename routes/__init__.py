"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.supplier_alerts import router as supplier_alerts_router
from routes.order_plans import router as order_plans_router

__all__ = [
    "supplier_alerts_router",
    "order_plans_router",
]
