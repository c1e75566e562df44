from pydantic import BaseModel
from typing import List, Optional

from cmv_app.schemas.ingredient import IngredientResponse
from cmv_app.schemas.inventory import InventoryRecordResponse


class DashboardSummary(BaseModel):
    ingredient_count: int
    low_stock_count: int
    low_stock_items: List[IngredientResponse] = []
    inventory_value: float
    recipe_count: int
    average_recipe_cmv: Optional[float] = None
    total_waste_cost: float
    latest_inventory_record: Optional[InventoryRecordResponse] = None
