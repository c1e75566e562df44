from fastapi import APIRouter, Depends, Query
from typing import Optional

from cmv_app.catalog import EntityCatalog
from cmv_app.dependencies import get_catalog
from cmv_app.schemas.cmv import CmvReport
from cmv_app.services.cmv import cmv_report

router = APIRouter()


@router.get("/", response_model=CmvReport)
def get_cmv_report(
    start_record_id: Optional[str] = Query(None, description="Initial inventory record (default: second most recent)"),
    end_record_id: Optional[str] = Query(None, description="Final inventory record (default: most recent)"),
    catalog: EntityCatalog = Depends(get_catalog)
):
    """
    Cost of goods sold between two inventory records:
    initial inventory + purchases - final inventory

    Fewer than two records or an inverted period is answered with an
    InsufficientPeriodData error body instead of a number.
    """
    return cmv_report(catalog.inventory_records, catalog.movements, start_record_id, end_record_id)
