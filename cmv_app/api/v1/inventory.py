from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List, Optional
from datetime import datetime

from cmv_app.catalog import EntityCatalog
from cmv_app.config import settings
from cmv_app.dependencies import get_catalog, get_inventory_audit, get_now
from cmv_app.exceptions import (
    AuditStateError,
    EntityNotFound,
    InvalidQuantity,
    UnknownIngredientReference
)
from cmv_app.models import InventoryRecord, MovementType, StockMovement
from cmv_app.schemas.inventory import (
    MovementCreate,
    MovementResponse,
    PricePoint,
    AuditCount,
    AuditVariance,
    AuditStatusResponse,
    InventoryRecordResponse
)
from cmv_app.services.inventory_audit import InventoryAudit
from cmv_app.services.price_history import PriceHistory
from cmv_app.services.stock_ledger import movements_by_date, record_movement

router = APIRouter()


def movement_response(catalog: EntityCatalog, movement: StockMovement) -> dict:
    ingredient = catalog.find_ingredient(movement.ingredient_id)
    return {
        **movement.model_dump(),
        "ingredient_name": catalog.ingredient_name(movement.ingredient_id),
        "ingredient_removed": ingredient is None
    }


def record_response(catalog: EntityCatalog, record: InventoryRecord) -> dict:
    return {
        "id": record.id,
        "date": record.date,
        "total_value": record.total_value,
        "items_counted": record.items_counted,
        "snapshot": [
            {
                "ingredient_id": item.ingredient_id,
                "ingredient_name": catalog.ingredient_name(item.ingredient_id),
                "quantity": item.quantity,
                "cost": item.cost
            }
            for item in record.snapshot
        ]
    }


def _audit_status(audit: InventoryAudit) -> dict:
    return {"state": audit.state, "counts": audit.counts}


def _conflict(exc: AuditStateError):
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message)


# Movements

@router.get("/movements", response_model=List[MovementResponse])
def get_movements(
    ingredient_id: Optional[str] = Query(None, description="Filter by ingredient"),
    type: Optional[MovementType] = Query(None, description="Filter by direction"),
    limit: int = Query(100, le=1000, description="Limit results"),
    catalog: EntityCatalog = Depends(get_catalog)
):
    """Get stock movements, newest first"""

    movements = movements_by_date(catalog.movements, ingredient_id=ingredient_id, direction=type)

    return [movement_response(catalog, m) for m in movements[:limit]]


@router.post("/movements", response_model=MovementResponse, status_code=status.HTTP_201_CREATED)
def create_movement(
    data: MovementCreate,
    catalog: EntityCatalog = Depends(get_catalog),
    now: datetime = Depends(get_now)
):
    """Record a purchase (IN) or consumption (OUT)"""

    try:
        movement = record_movement(
            catalog,
            data.ingredient_id,
            data.type,
            data.quantity,
            date=data.date or now,
            now=now,
            unit_price=data.unit_price,
            description=data.description
        )
    except InvalidQuantity as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)
    except UnknownIngredientReference:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")

    return movement_response(catalog, movement)


@router.get("/price-history/{ingredient_id}", response_model=List[PricePoint])
def get_price_history(
    ingredient_id: str,
    catalog: EntityCatalog = Depends(get_catalog),
    now: datetime = Depends(get_now)
):
    """Unit purchase prices over the trailing window, ending at the current cost"""

    ingredient = catalog.find_ingredient(ingredient_id)
    if ingredient is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")

    return list(PriceHistory(ingredient, catalog.movements, now, months=settings.PRICE_HISTORY_MONTHS))


# Audit session

@router.get("/audit", response_model=AuditStatusResponse)
def get_audit_status(
    audit: InventoryAudit = Depends(get_inventory_audit)
):
    """Current audit state and counted quantities"""
    return _audit_status(audit)


@router.post("/audit/start", response_model=AuditStatusResponse)
def start_audit(
    audit: InventoryAudit = Depends(get_inventory_audit)
):
    """Start a physical count; counts default to system stock"""
    try:
        audit.start()
    except AuditStateError as exc:
        raise _conflict(exc)
    return _audit_status(audit)


@router.put("/audit/counts", response_model=AuditStatusResponse)
def set_audit_count(
    data: AuditCount,
    audit: InventoryAudit = Depends(get_inventory_audit)
):
    """Store the counted quantity of one ingredient"""
    try:
        audit.set_count(data.ingredient_id, data.quantity)
    except AuditStateError as exc:
        raise _conflict(exc)
    except InvalidQuantity as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)
    except UnknownIngredientReference:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")
    return _audit_status(audit)


@router.get("/audit/variances", response_model=List[AuditVariance])
def get_audit_variances(
    audit: InventoryAudit = Depends(get_inventory_audit)
):
    """Counted minus system stock for every ingredient"""
    try:
        return audit.variances()
    except AuditStateError as exc:
        raise _conflict(exc)


@router.post("/audit/cancel", response_model=AuditStatusResponse)
def cancel_audit(
    audit: InventoryAudit = Depends(get_inventory_audit)
):
    """Discard the count without touching stock"""
    try:
        audit.cancel()
    except AuditStateError as exc:
        raise _conflict(exc)
    return _audit_status(audit)


@router.post("/audit/finalize", response_model=InventoryRecordResponse, status_code=status.HTTP_201_CREATED)
def finalize_audit(
    catalog: EntityCatalog = Depends(get_catalog),
    audit: InventoryAudit = Depends(get_inventory_audit),
    now: datetime = Depends(get_now)
):
    """Overwrite stock with the counts and store an inventory record. Cannot be undone."""
    try:
        record = audit.finalize(now)
    except AuditStateError as exc:
        raise _conflict(exc)
    return record_response(catalog, record)


# Inventory records

@router.get("/records", response_model=List[InventoryRecordResponse])
def get_inventory_records(
    catalog: EntityCatalog = Depends(get_catalog)
):
    """Inventory records, newest first"""
    records = sorted(catalog.inventory_records, key=lambda r: r.date, reverse=True)
    return [record_response(catalog, r) for r in records]


@router.get("/records/{record_id}", response_model=InventoryRecordResponse)
def get_inventory_record(
    record_id: str,
    catalog: EntityCatalog = Depends(get_catalog)
):
    """Get inventory record by ID"""
    try:
        record = catalog.get_inventory_record(record_id)
    except EntityNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inventory record not found")
    return record_response(catalog, record)
