"""
Order plan generator.

Turns a free-text shopping list into one consolidated order per supplier:
1. Match each line to the first supplier catalog item that fits
2. Find the supplier's nearest delivery that can still be ordered
3. Merge lines per supplier; the tightest deadline governs the batch

Lines nothing matches, or whose supplier has no orderable delivery soon,
are returned as unmatched.
"""

from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo
import structlog

from models.order_plan import OrderPlanResponse, PlanItem, SupplierPlan
from models.supplier import CatalogItem, ScheduleEntry, Supplier
from services.schedule_service import (
    DeliveryOccurrence,
    compute_deadline,
    find_entry,
    resolve_schedule,
)
from services.store_service import get_store_service
from services.supplier_service import get_supplier_service
from utils.text_utils import normalize_item_text

logger = structlog.get_logger(__name__)

PLAN_LOOKAHEAD_DAYS = 14


class CatalogMatcher:
    """Decides whether a shopping-list line refers to a catalog item."""

    def match(self, query: str, catalog_name: str) -> bool:
        raise NotImplementedError


class SubstringMatcher(CatalogMatcher):
    """
    Permissive bidirectional containment.

    "tomatoes" matches "Round Tomatoes 5kg", and "fresh basil leaves"
    matches "Basil". Short queries match broadly.
    """

    def match(self, query: str, catalog_name: str) -> bool:
        query = normalize_item_text(query)
        name = normalize_item_text(catalog_name)
        if not query or not name:
            return False
        return name in query or query in name


def find_next_delivery(
    schedule: list[ScheduleEntry],
    today: date,
    now: datetime,
    tz: ZoneInfo,
) -> Optional[tuple[DeliveryOccurrence, datetime]]:
    """
    Earliest delivery after today whose hard deadline is still ahead.

    Returns:
        (occurrence, deadline) or None if nothing is orderable within
        PLAN_LOOKAHEAD_DAYS
    """
    for i in range(1, PLAN_LOOKAHEAD_DAYS + 1):
        candidate = today + timedelta(days=i)
        entry = find_entry(schedule, candidate)
        if entry is None:
            continue

        deadline = compute_deadline(entry, candidate, tz)
        if deadline > now:
            return DeliveryOccurrence(delivery_date=candidate, entry=entry), deadline

    return None


class OrderPlanService:
    """
    Shopping list to supplier plans.

    The matcher is pluggable; matching runs over suppliers in directory
    order, then catalog items in catalog order, and the first hit wins.
    """

    def __init__(self, matcher: Optional[CatalogMatcher] = None):
        self.supplier_service = get_supplier_service()
        self.store_service = get_store_service()
        self.matcher = matcher or SubstringMatcher()

    def find_match(
        self,
        query: str,
        suppliers: list[Supplier],
    ) -> Optional[tuple[Supplier, CatalogItem]]:
        """First (supplier, catalog item) pair the matcher accepts."""
        for supplier in suppliers:
            for item in supplier.items:
                if self.matcher.match(query, item.name):
                    return supplier, item
        return None

    def generate_plan(
        self,
        items: list[str],
        store_id: str,
        now: Optional[datetime] = None,
    ) -> OrderPlanResponse:
        """
        Build consolidated supplier plans for a shopping list.

        Args:
            items: Free-text item names
            store_id: Store UUID
            now: Reference time (naive values are read in the store's zone)

        Returns:
            OrderPlanResponse with plans in first-matched order

        Raises:
            StoreNotFoundError: If the store doesn't exist
            ConfigurationError: If the store has no timezone
        """
        store = self.store_service.get_by_id(store_id)
        tz = self.store_service.get_timezone(store_id, store=store)

        if now is None:
            now = datetime.now(tz)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=tz)
        today = now.astimezone(tz).date()

        suppliers = self.supplier_service.list_active_for_store(store_id)

        logger.info(
            "generating_order_plan",
            store_id=store_id,
            items=len(items),
            suppliers=len(suppliers)
        )

        plans: dict[str, SupplierPlan] = {}
        unmatched: list[str] = []

        for raw in items:
            query = normalize_item_text(raw)
            if not query:
                continue

            match = self.find_match(query, suppliers)
            if match is None:
                unmatched.append(raw)
                continue

            supplier, catalog_item = match
            schedule = resolve_schedule(supplier, today)
            delivery = find_next_delivery(schedule, today, now, tz)

            if delivery is None:
                logger.info(
                    "plan_item_no_delivery",
                    item=query,
                    supplier_id=supplier.id
                )
                unmatched.append(f"{query} (No delivery soon from {supplier.name})")
                continue

            occurrence, deadline = delivery
            plan = plans.get(supplier.id)
            if plan is None:
                plan = SupplierPlan(
                    supplier_id=supplier.id,
                    supplier_name=supplier.name,
                    order_deadline=deadline,
                    delivery_date=occurrence.delivery_date,
                    minimum_order_value=supplier.minimum_order_value,
                    is_tax_exclusive=supplier.minimum_order_is_tax_exclusive,
                )
                plans[supplier.id] = plan
            elif deadline < plan.order_deadline:
                plan.order_deadline = deadline
                plan.delivery_date = occurrence.delivery_date

            plan.items.append(PlanItem(
                searched_text=raw,
                matched_catalog_name=catalog_item.name,
            ))

        logger.info(
            "order_plan_generated",
            store_id=store_id,
            plans=len(plans),
            unmatched=len(unmatched)
        )

        return OrderPlanResponse(plans=list(plans.values()), unmatched=unmatched)


# Singleton instance
_order_plan_service: Optional[OrderPlanService] = None


def get_order_plan_service() -> OrderPlanService:
    """Get or create OrderPlanService instance."""
    global _order_plan_service
    if _order_plan_service is None:
        _order_plan_service = OrderPlanService()
    return _order_plan_service
