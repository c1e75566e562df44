"""
Price History Extractor

Per-unit purchase prices of one ingredient over a trailing window, oldest
first, ending with a "current" point whenever the last purchase price is not
the live cost.
"""
import math
from datetime import datetime
from typing import Iterator, List

from cmv_app.models import Ingredient, MovementType, StockMovement
from cmv_app.schemas.inventory import PricePoint
from cmv_app.utils.timezone import subtract_months

CURRENT_LABEL = "current"
DEFAULT_WINDOW_MONTHS = 6


class PriceHistory:
    """Restartable: every iteration reads the ledger again"""

    def __init__(self, ingredient: Ingredient, movements: List[StockMovement], now: datetime,
                 months: int = DEFAULT_WINDOW_MONTHS):
        self.ingredient = ingredient
        self.movements = movements
        self.now = now
        self.since = subtract_months(now, months)

    def _purchases(self) -> List[StockMovement]:
        purchases = [
            m for m in self.movements
            if m.ingredient_id == self.ingredient.id
            and m.type == MovementType.IN
            and m.date >= self.since
        ]
        return sorted(purchases, key=lambda m: m.date)

    def __iter__(self) -> Iterator[PricePoint]:
        last_price = None
        for movement in self._purchases():
            # Quantity is always > 0 for recorded movements
            last_price = movement.value / movement.quantity
            yield PricePoint(
                label=movement.date.strftime("%d/%m"),
                date=movement.date,
                price=last_price,
            )

        current = self.ingredient.cost_per_unit
        if last_price is None or not math.isclose(last_price, current, abs_tol=1e-9):
            yield PricePoint(label=CURRENT_LABEL, date=self.now, price=current, is_current=True)


def price_history(ingredient: Ingredient, movements: List[StockMovement], now: datetime,
                  months: int = DEFAULT_WINDOW_MONTHS) -> List[PricePoint]:
    return list(PriceHistory(ingredient, movements, now, months))
