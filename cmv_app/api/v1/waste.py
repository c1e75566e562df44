from fastapi import APIRouter, Depends, HTTPException, status
from datetime import datetime

from cmv_app.catalog import EntityCatalog
from cmv_app.dependencies import get_catalog, get_now
from cmv_app.exceptions import InvalidQuantity, UnknownIngredientReference
from cmv_app.models import WasteLog, WASTE_REASONS
from cmv_app.schemas.waste import WasteCreate, WasteLogResponse, WasteSummary
from cmv_app.services.waste import log_waste, total_waste_cost

router = APIRouter()


def _waste_response(catalog: EntityCatalog, log: WasteLog) -> dict:
    return {**log.model_dump(), "ingredient_name": catalog.ingredient_name(log.ingredient_id)}


@router.get("/", response_model=WasteSummary)
def get_waste_logs(
    catalog: EntityCatalog = Depends(get_catalog)
):
    """Waste logs, newest first, with the total wasted value"""
    logs = sorted(catalog.waste_logs, key=lambda log: log.date, reverse=True)
    return {
        "total_cost": total_waste_cost(logs),
        "total_logs": len(logs),
        "logs": [_waste_response(catalog, log) for log in logs]
    }


@router.get("/reasons")
def get_waste_reasons():
    """Suggested waste reasons"""
    return {"reasons": WASTE_REASONS}


@router.post("/", response_model=WasteLogResponse, status_code=status.HTTP_201_CREATED)
def create_waste_log(
    data: WasteCreate,
    catalog: EntityCatalog = Depends(get_catalog),
    now: datetime = Depends(get_now)
):
    """Log a loss and remove it from stock"""
    try:
        log = log_waste(
            catalog,
            data.ingredient_id,
            data.quantity,
            reason=data.reason,
            responsible=data.responsible,
            date=data.date or now,
            now=now
        )
    except InvalidQuantity as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)
    except UnknownIngredientReference:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")

    return _waste_response(catalog, log)
