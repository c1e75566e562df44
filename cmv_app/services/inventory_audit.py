"""
Inventory Valuation & Audit Engine

Two states, IDLE and COUNTING. A count starts from the system stock of every
ingredient; finalize overwrites stock with the counted quantities and stores
one immutable InventoryRecord valued at the costs of that moment. Finalize
cannot be undone.
"""
import logging
import math
from datetime import datetime
from typing import Dict, List

from cmv_app.catalog import EntityCatalog
from cmv_app.exceptions import AuditStateError, InvalidQuantity
from cmv_app.models import InventoryRecord, SnapshotItem
from cmv_app.schemas.inventory import AuditState, AuditVariance, VarianceStatus

logger = logging.getLogger(__name__)


def variance_status(diff: float) -> VarianceStatus:
    if diff > 0:
        return VarianceStatus.SURPLUS
    if diff < 0:
        return VarianceStatus.SHORTAGE
    return VarianceStatus.MATCH


class InventoryAudit:

    def __init__(self, catalog: EntityCatalog):
        self.catalog = catalog
        self.state = AuditState.IDLE
        self.counts: Dict[str, float] = {}

    @property
    def is_counting(self) -> bool:
        return self.state == AuditState.COUNTING

    def _require_counting(self, operation: str) -> None:
        if not self.is_counting:
            raise AuditStateError(f"Cannot {operation}: no inventory count in progress")

    def start(self) -> Dict[str, float]:
        if self.is_counting:
            raise AuditStateError("An inventory count is already in progress")
        self.counts = {i.id: i.current_stock for i in self.catalog.ingredients}
        self.state = AuditState.COUNTING
        logger.info("Inventory count started for %d ingredients", len(self.counts))
        return dict(self.counts)

    def set_count(self, ingredient_id: str, quantity) -> float:
        self._require_counting("set a count")
        self.catalog.get_ingredient(ingredient_id)
        try:
            value = float(quantity)
        except (TypeError, ValueError):
            raise InvalidQuantity(quantity)
        # Zero is a valid count; there is no upper bound
        if math.isnan(value) or math.isinf(value) or value < 0:
            raise InvalidQuantity(quantity)
        self.counts[ingredient_id] = value
        return value

    def cancel(self) -> None:
        self._require_counting("cancel")
        self.counts = {}
        self.state = AuditState.IDLE
        logger.info("Inventory count cancelled")

    def variances(self) -> List[AuditVariance]:
        """Counted minus system stock per ingredient; nothing is persisted"""
        self._require_counting("compute variances")
        result = []
        for ingredient in self.catalog.ingredients:
            counted = self.counts.get(ingredient.id, ingredient.current_stock)
            diff = counted - ingredient.current_stock
            result.append(AuditVariance(
                ingredient_id=ingredient.id,
                ingredient_name=ingredient.name,
                system_stock=ingredient.current_stock,
                counted=counted,
                diff=diff,
                status=variance_status(diff),
            ))
        return result

    def finalize(self, now: datetime) -> InventoryRecord:
        self._require_counting("finalize")
        record = build_inventory_record(self.catalog, self.counts, now)

        # Stock takes the counted value whatever the variance
        for item in record.snapshot:
            ingredient = self.catalog.get_ingredient(item.ingredient_id)
            self.catalog.replace_ingredient(
                ingredient.model_copy(update={"current_stock": item.quantity, "last_updated": now})
            )
        self.catalog.add_inventory_record(record)

        self.counts = {}
        self.state = AuditState.IDLE
        logger.info(
            "Inventory record %s finalized: %d items, total value %.2f",
            record.id, record.items_counted, record.total_value,
        )
        return record


def build_inventory_record(catalog: EntityCatalog, counts: Dict[str, float], now: datetime) -> InventoryRecord:
    """Value a count map at current costs; ingredients no longer in the catalog are skipped"""
    index = catalog.ingredient_index()
    total_value = 0.0
    snapshot = []
    for ingredient_id, quantity in counts.items():
        ingredient = index.get(ingredient_id)
        if ingredient is None:
            continue
        total_value += quantity * ingredient.cost_per_unit
        snapshot.append(SnapshotItem(ingredient_id=ingredient_id, quantity=quantity, cost=ingredient.cost_per_unit))

    return InventoryRecord(
        date=now,
        total_value=total_value,
        items_counted=len(snapshot),
        snapshot=snapshot,
    )
