"""Waste logging: valued at the ingredient's current cost and removed from stock"""
import logging
from datetime import datetime
from typing import List

from cmv_app.catalog import EntityCatalog
from cmv_app.models import WasteLog
from cmv_app.services.stock_ledger import apply_stock_change, validate_quantity

logger = logging.getLogger(__name__)


def log_waste(
    catalog: EntityCatalog,
    ingredient_id: str,
    quantity,
    reason: str,
    responsible: str,
    date: datetime,
    now: datetime,
) -> WasteLog:
    quantity = validate_quantity(quantity)
    ingredient = catalog.get_ingredient(ingredient_id)

    log = WasteLog(
        ingredient_id=ingredient.id,
        quantity=quantity,
        cost=quantity * ingredient.cost_per_unit,
        reason=reason,
        responsible=responsible,
        date=date,
    )
    catalog.add_waste_log(log)
    catalog.replace_ingredient(ingredient.model_copy(update={
        "current_stock": apply_stock_change(ingredient.current_stock, -quantity),
        "last_updated": now,
    }))

    logger.info("Waste logged for %s: %.4f %s (%s), cost %.2f",
                ingredient.name, quantity, ingredient.unit.value, reason, log.cost)
    return log


def total_waste_cost(logs: List[WasteLog]) -> float:
    return sum(log.cost for log in logs)
