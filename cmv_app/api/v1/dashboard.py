from fastapi import APIRouter, Depends

from cmv_app.catalog import EntityCatalog
from cmv_app.dependencies import get_catalog
from cmv_app.schemas.dashboard import DashboardSummary
from cmv_app.services.dashboard import dashboard_figures
from cmv_app.api.v1.ingredients import ingredient_response
from cmv_app.api.v1.inventory import record_response

router = APIRouter()


@router.get("/summary", response_model=DashboardSummary)
def get_dashboard_summary(
    catalog: EntityCatalog = Depends(get_catalog)
):
    """
    Overview of the business:
    - Low stock alerts
    - Inventory value
    - Average recipe CMV
    - Total waste
    - Latest inventory count
    """
    figures = dashboard_figures(catalog)
    latest = figures["latest_inventory_record"]

    return {
        **figures,
        "low_stock_items": [ingredient_response(catalog, i) for i in figures["low_stock_items"]],
        "latest_inventory_record": record_response(catalog, latest) if latest else None
    }
