"""
Services Package

Calculators and catalog operations for the CMV dashboard.
"""

from .recipe_cost import (
    classify_cmv,
    cmv_percentage,
    calculate_recipe_cost,
)

from .stock_ledger import (
    validate_quantity,
    apply_stock_change,
    record_movement,
    movements_by_date,
)

from .inventory_audit import (
    InventoryAudit,
    build_inventory_record,
)

from .cmv import (
    select_period,
    calculate_cmv,
    cmv_report,
)

from .price_history import (
    PriceHistory,
    price_history,
)

from .waste import (
    log_waste,
    total_waste_cost,
)

__all__ = [
    # Recipe cost
    'classify_cmv',
    'cmv_percentage',
    'calculate_recipe_cost',
    # Ledger
    'validate_quantity',
    'apply_stock_change',
    'record_movement',
    'movements_by_date',
    # Audit
    'InventoryAudit',
    'build_inventory_record',
    # CMV
    'select_period',
    'calculate_cmv',
    'cmv_report',
    # Price history
    'PriceHistory',
    'price_history',
    # Waste
    'log_waste',
    'total_waste_cost',
]
