# routers/inventory.py

import csv
import io
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from core.config import settings
from core.permission_helpers import requires_area
from dependencies.store import get_ledger
from models.enums import FeatureArea, ResourceUnit
from services.inventory_ledger import InventoryLedger


router = APIRouter(
    prefix="/api/inventory",
    tags=["Inventory"],
    dependencies=[Depends(requires_area(FeatureArea.resources))],
)

EXPORT_COLUMNS = [
    "id",
    "createdAt",
    "resourceName",
    "category",
    "quantity",
    "unitValue",
    "totalValue",
    "recipient",
    "location",
    "status",
    "notes",
]


@router.get("/low-stock", summary="Resources running low")
def low_stock(
    threshold: int = Query(settings.LOW_STOCK_THRESHOLD, ge=0),
    ledger: InventoryLedger = Depends(get_ledger),
):
    return {"threshold": threshold, "resources": ledger.low_stock(threshold)}


@router.get("/out-of-stock", summary="Resources with no stock left")
def out_of_stock(ledger: InventoryLedger = Depends(get_ledger)):
    return {"resources": ledger.out_of_stock()}


@router.get("/category-stats", summary="Usage per category")
def category_stats(
    limit: int = Query(5, ge=1, le=1000),
    category: Optional[str] = None,
    ledger: InventoryLedger = Depends(get_ledger),
):
    return {"categories": ledger.category_stats(limit=limit, category_filter=category)}


@router.get("/distribution-stats", summary="Distribution totals")
def distribution_stats(
    category: Optional[str] = None,
    ledger: InventoryLedger = Depends(get_ledger),
):
    return ledger.distribution_stats(category_filter=category)


@router.get("/recent-distributions", summary="Latest distributions")
def recent_distributions(
    limit: int = Query(5, ge=1, le=100),
    category: Optional[str] = None,
    ledger: InventoryLedger = Depends(get_ledger),
):
    return {"distributions": ledger.recent_distributions(limit=limit, category_filter=category)}


@router.get("/categories", summary="Category names used by resources")
def resource_categories(ledger: InventoryLedger = Depends(get_ledger)):
    return {"categories": ledger.resource_categories()}


@router.get("/units", summary="Suggested resource units")
def resource_units():
    return {"units": ResourceUnit.list()}


@router.get("/export", summary="Distribution history as CSV")
def export_distributions(
    category: Optional[str] = None,
    ledger: InventoryLedger = Depends(get_ledger),
):
    rows = ledger.distributions_for_export(category_filter=category)

    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=EXPORT_COLUMNS, extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow({col: row.get(col, "") for col in EXPORT_COLUMNS})

    suffix = f"-{category}" if category and category != "all" else ""
    return Response(
        content=buffer.getvalue(),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="distributions{suffix}.csv"'},
    )
