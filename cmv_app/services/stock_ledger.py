"""
Stock Movement Ledger

Appends IN/OUT movements and keeps each ingredient's stock level in step.
Costing policy is last-price-wins: a purchase with an explicit unit price
overwrites the ingredient's cost_per_unit. Weighted-average costing is not
implemented.
"""
import logging
import math
from datetime import datetime
from typing import List, Optional

from cmv_app.catalog import EntityCatalog
from cmv_app.exceptions import InvalidQuantity
from cmv_app.models import MovementType, StockMovement

logger = logging.getLogger(__name__)


def validate_quantity(quantity) -> float:
    """Reject anything that is not a finite number greater than zero"""
    try:
        value = float(quantity)
    except (TypeError, ValueError):
        raise InvalidQuantity(quantity)
    if math.isnan(value) or math.isinf(value) or value <= 0:
        raise InvalidQuantity(quantity)
    return value


def apply_stock_change(current_stock: float, delta: float) -> float:
    """Stock never goes below zero"""
    return max(0.0, current_stock + delta)


def record_movement(
    catalog: EntityCatalog,
    ingredient_id: str,
    direction: MovementType,
    quantity,
    date: datetime,
    now: datetime,
    unit_price: Optional[float] = None,
    description: Optional[str] = None,
) -> StockMovement:
    quantity = validate_quantity(quantity)
    ingredient = catalog.get_ingredient(ingredient_id)

    # Value is taken before the ingredient is touched so the ledger keeps the cost of the moment
    price_given = direction == MovementType.IN and bool(unit_price)
    unit_value = unit_price if price_given else ingredient.cost_per_unit

    movement = StockMovement(
        ingredient_id=ingredient.id,
        type=direction,
        quantity=quantity,
        value=unit_value * quantity,
        date=date,
        description=description,
    )
    catalog.add_movement(movement)

    delta = quantity if direction == MovementType.IN else -quantity
    changes = {
        "current_stock": apply_stock_change(ingredient.current_stock, delta),
        "last_updated": now,
    }
    if price_given:
        changes["cost_per_unit"] = unit_price
    catalog.replace_ingredient(ingredient.model_copy(update=changes))

    logger.info(
        "Movement %s recorded: %s %.4f %s of %s (value %.2f)",
        movement.id, direction.value, quantity, ingredient.unit.value, ingredient.name, movement.value,
    )
    return movement


def movements_by_date(
    movements: List[StockMovement],
    ingredient_id: Optional[str] = None,
    direction: Optional[MovementType] = None,
    newest_first: bool = True,
) -> List[StockMovement]:
    """Filtered copy of the ledger sorted by occurrence date"""
    selected = [
        m for m in movements
        if (ingredient_id is None or m.ingredient_id == ingredient_id)
        and (direction is None or m.type == direction)
    ]
    return sorted(selected, key=lambda m: m.date, reverse=newest_first)
