# services/inventory_ledger.py

"""
Inventory ledger: stock-health views over resources and distributions,
and the one write that must keep them consistent: recording a
distribution decrements the resource's stock.

The decrement is a compare-and-set on ``resources.quantity`` retried a
bounded number of times, so two concurrent requests can never both spend
the same units. The distribution document is written only after the
decrement commits; if that insert fails the units are put back.
"""

import math
from typing import List, Optional, Tuple

from core.config import settings
from core.document_store import DocumentStore
from core.errors import (
    ConcurrentUpdateError,
    InsufficientStockError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from core.logging_config import logger
from core.timestamps import parse_timestamp, utcnow_iso
from models.enums import DistributionStatus


RESOURCES = "resources"
DISTRIBUTIONS = "distributions"

UNCATEGORIZED = "Other"
UNKNOWN_CATEGORY = "Unknown"


def _number(value) -> float:
    """Numeric field value, or 0 for missing / non-numeric data."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, (int, float)):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _wants_filter(category_filter: Optional[str]) -> bool:
    return bool(category_filter) and category_filter != "all"


class InventoryLedger:

    def __init__(self, store: DocumentStore, *, max_attempts: int = 3):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.store = store
        self.max_attempts = max_attempts

    # ============================================================
    # RECORD DISTRIBUTION
    # ============================================================
    def record_distribution(
        self,
        resource_id: str,
        quantity: int,
        recipient: str,
        location: str,
        notes: Optional[str] = None,
        date=None,
        recorded_by: Optional[dict] = None,
    ) -> dict:
        """
        Hand out `quantity` units of a resource.

        Raises ValidationError for bad input, NotFoundError for an unknown
        resource, InsufficientStockError when stock is short at commit time
        and ConcurrentUpdateError when every compare-and-set attempt lost a
        race. No state changes in any of those cases.
        """
        if not resource_id or not str(resource_id).strip():
            raise ValidationError("resourceId is required")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError("Quantity must be a positive whole number")
        if not recipient or not str(recipient).strip():
            raise ValidationError("Recipient is required")
        if not location or not str(location).strip():
            raise ValidationError("Location is required")
        recorded_on = parse_timestamp(date) if date else None

        resource = self._decrement_stock(resource_id, quantity)

        unit_value = _number(resource.get("value"))
        now = utcnow_iso()
        distribution = {
            "resourceId": resource_id,
            "resourceName": resource.get("name"),
            "quantity": quantity,
            "unitValue": unit_value,
            "totalValue": quantity * unit_value,
            "recipient": str(recipient).strip(),
            "location": str(location).strip(),
            "notes": notes or "",
            "date": recorded_on or now,
            "status": DistributionStatus.pending.value,
            "createdAt": now,
            "updatedAt": now,
        }
        if recorded_by:
            distribution["recordedBy"] = recorded_by.get("id")
            distribution["recordedByName"] = recorded_by.get("name")

        try:
            created = self.store.add(DISTRIBUTIONS, distribution)
        except StoreError:
            self._restore_stock(resource_id, quantity)
            raise

        logger.info(
            f"Distribution {created.get('id')} recorded: {quantity} × {resource_id} → {distribution['recipient']}"
        )
        return created

    def _decrement_stock(self, resource_id: str, quantity: int) -> dict:
        for attempt in range(1, self.max_attempts + 1):
            resource = self.store.get(RESOURCES, resource_id)
            if resource is None:
                raise NotFoundError(f"Resource '{resource_id}' not found")

            current = resource.get("quantity")
            stock = int(_number(current))
            if quantity > stock:
                raise InsufficientStockError(resource_id, quantity, stock)

            committed = self.store.compare_and_set(
                RESOURCES,
                resource_id,
                "quantity",
                current,
                stock - quantity,
                extra={"updatedAt": utcnow_iso()},
            )
            if committed:
                return resource

            logger.warning(
                f"Stock for resource {resource_id} changed during distribution (attempt {attempt}/{self.max_attempts})"
            )

        raise ConcurrentUpdateError(
            f"Stock for resource '{resource_id}' is changing too quickly, please retry"
        )

    def _restore_stock(self, resource_id: str, quantity: int) -> bool:
        """Compensate a committed decrement whose distribution insert failed."""
        try:
            for _ in range(self.max_attempts):
                resource = self.store.get(RESOURCES, resource_id)
                if resource is None:
                    break
                current = resource.get("quantity")
                if self.store.compare_and_set(
                    RESOURCES,
                    resource_id,
                    "quantity",
                    current,
                    int(_number(current)) + quantity,
                    extra={"updatedAt": utcnow_iso()},
                ):
                    logger.info(f"Restored {quantity} units to resource {resource_id}")
                    return True
        except StoreError as e:
            logger.error(f"Stock restore for resource {resource_id} failed: {e}")

        logger.error(
            f"Resource {resource_id} is short {quantity} units: distribution insert failed and stock was not restored"
        )
        return False

    # ============================================================
    # STOCK HEALTH
    # ============================================================
    def low_stock(self, threshold: Optional[int] = None) -> List[dict]:
        if threshold is None:
            threshold = settings.LOW_STOCK_THRESHOLD
        return self.store.list(
            RESOURCES, [("quantity", ">", 0), ("quantity", "<=", threshold)]
        )

    def out_of_stock(self) -> List[dict]:
        return self.store.list(RESOURCES, [("quantity", "==", 0)])

    def resource_categories(self) -> List[str]:
        """Distinct category names in use, for filter dropdowns."""
        names = {r.get("category") for r in self.store.list(RESOURCES)}
        return sorted(name for name in names if name)

    # ============================================================
    # CATEGORY STATS
    # ============================================================
    def category_stats(self, limit: Optional[int] = 5, category_filter: Optional[str] = None) -> List[dict]:
        resources = self.store.list(RESOURCES)
        distributions = self.store.list(DISTRIBUTIONS)

        categories = {}
        by_id = {}

        for resource in resources:
            by_id[resource.get("id")] = resource
            name = resource.get("category") or UNCATEGORIZED
            entry = categories.setdefault(
                name,
                {"value": 0, "count": 0, "total_quantity": 0, "used_quantity": 0, "used_value": 0},
            )
            quantity = _number(resource.get("quantity"))
            entry["value"] += _number(resource.get("value")) * quantity
            entry["count"] += 1
            entry["total_quantity"] += quantity

        for distribution in distributions:
            resource = by_id.get(distribution.get("resourceId"))
            if resource is None:
                continue
            entry = categories[resource.get("category") or UNCATEGORIZED]
            quantity = _number(distribution.get("quantity"))
            entry["used_quantity"] += quantity
            entry["used_value"] += quantity * _number(resource.get("value"))

        stats = []
        for name, entry in categories.items():
            used = entry["used_quantity"]
            remaining = max(0, entry["total_quantity"] - used)
            denominator = used + remaining
            percentage = _round_half_up(100 * used / denominator) if denominator > 0 else 0
            stats.append({
                "category": name,
                "value": entry["used_value"],
                "totalValue": entry["value"],
                "count": entry["count"],
                "quantity": entry["total_quantity"],
                "used": used,
                "remaining": remaining,
                "percentage": min(100, max(0, percentage)),
            })

        stats.sort(key=lambda s: s["used"], reverse=True)

        if _wants_filter(category_filter):
            stats = [s for s in stats if s["category"] == category_filter]

        return stats if limit is None else stats[:limit]

    # ============================================================
    # DISTRIBUTION QUERIES
    # ============================================================
    def _category_where(self, category_filter: Optional[str]) -> Optional[list]:
        """
        Where-clause restricting distributions to one category.
        [] means no restriction; None means the category has no resources.
        """
        if not _wants_filter(category_filter):
            return []
        resource_ids = [
            r.get("id")
            for r in self.store.list(RESOURCES, [("category", "==", category_filter)])
        ]
        if not resource_ids:
            return None
        return [("resourceId", "in", resource_ids)]

    def distribution_stats(self, category_filter: Optional[str] = None) -> dict:
        stats = {
            "totalDistributions": 0,
            "valueDistributed": 0,
            "quantitiesDistributed": 0,
            "pendingDistributions": 0,
        }

        where = self._category_where(category_filter)
        if where is None:
            return stats

        for distribution in self.store.list(DISTRIBUTIONS, where):
            stats["totalDistributions"] += 1
            if distribution.get("status") == DistributionStatus.pending.value:
                stats["pendingDistributions"] += 1
            if _is_number(distribution.get("totalValue")):
                stats["valueDistributed"] += distribution["totalValue"]
            if _is_number(distribution.get("quantity")):
                stats["quantitiesDistributed"] += distribution["quantity"]

        return stats

    def _with_categories(self, distributions: List[dict]) -> List[dict]:
        categories = {r.get("id"): r.get("category") for r in self.store.list(RESOURCES)}
        return [
            {**d, "category": categories.get(d.get("resourceId")) or UNKNOWN_CATEGORY}
            for d in distributions
        ]

    def recent_distributions(self, limit: int = 5, category_filter: Optional[str] = None) -> List[dict]:
        where = self._category_where(category_filter)
        if where is None:
            return []
        return self.store.list(DISTRIBUTIONS, where, order_by="createdAt", limit=limit)

    def list_distributions(
        self, limit: Optional[int] = 50, category_filter: Optional[str] = None
    ) -> Tuple[List[dict], int]:
        """One page of distributions, newest first, plus the unpaged total."""
        where = self._category_where(category_filter)
        if where is None:
            return [], 0

        rows = self.store.list(DISTRIBUTIONS, where, order_by="createdAt", limit=limit or None)
        total = self.store.count(DISTRIBUTIONS, where)
        return self._with_categories(rows), total

    def distributions_for_export(self, category_filter: Optional[str] = None) -> List[dict]:
        where = self._category_where(category_filter)
        if where is None:
            return []
        rows = self.store.list(DISTRIBUTIONS, where, order_by="createdAt")
        return self._with_categories(rows)
