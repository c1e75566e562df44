"""
CMV Period Calculator

CMV = initial inventory + purchases - final inventory, where purchases are
the IN movements strictly after the start record and up to the end record.
Negative results are returned as they are.
"""
from typing import List, Optional, Tuple

from cmv_app.exceptions import InsufficientPeriodData
from cmv_app.models import InventoryRecord, MovementType, StockMovement
from cmv_app.schemas.cmv import CmvReport


def select_period(
    records: List[InventoryRecord],
    start_id: Optional[str] = None,
    end_id: Optional[str] = None,
) -> Tuple[InventoryRecord, InventoryRecord]:
    """Pick start and end records; defaults to the two most recent"""
    if len(records) < 2:
        raise InsufficientPeriodData(
            "At least two inventory records are required to calculate CMV"
        )

    ordered = sorted(records, key=lambda r: r.date)
    by_id = {r.id: r for r in ordered}

    def pick(record_id, default):
        if record_id is None:
            return default
        if record_id not in by_id:
            raise InsufficientPeriodData(f"Inventory record '{record_id}' not found")
        return by_id[record_id]

    return pick(start_id, ordered[-2]), pick(end_id, ordered[-1])


def purchases_between(movements: List[StockMovement], start: InventoryRecord, end: InventoryRecord) -> List[StockMovement]:
    return [
        m for m in movements
        if m.type == MovementType.IN and start.date < m.date <= end.date
    ]


def calculate_cmv(start: InventoryRecord, end: InventoryRecord, movements: List[StockMovement]) -> CmvReport:
    if start.date >= end.date:
        raise InsufficientPeriodData("The final inventory must be dated after the initial inventory")

    purchases = purchases_between(movements, start, end)
    purchases_total = sum(m.value for m in purchases)
    available = start.total_value + purchases_total

    return CmvReport(
        start_record_id=start.id,
        end_record_id=end.id,
        start_date=start.date,
        end_date=end.date,
        initial_inventory=start.total_value,
        purchases=purchases_total,
        purchases_count=len(purchases),
        available_for_sale=available,
        final_inventory=end.total_value,
        cmv=available - end.total_value,
    )


def cmv_report(
    records: List[InventoryRecord],
    movements: List[StockMovement],
    start_id: Optional[str] = None,
    end_id: Optional[str] = None,
) -> CmvReport:
    start, end = select_period(records, start_id, end_id)
    return calculate_cmv(start, end, movements)
