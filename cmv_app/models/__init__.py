from cmv_app.models.ingredient import Ingredient, Unit
from cmv_app.models.recipe import Recipe, RecipeIngredient
from cmv_app.models.supplier import Supplier
from cmv_app.models.inventory import StockMovement, MovementType, InventoryRecord, SnapshotItem
from cmv_app.models.waste import WasteLog, WASTE_REASONS
from cmv_app.models.shopping import ShoppingItem

__all__ = [
    "Ingredient",
    "Unit",
    "Recipe",
    "RecipeIngredient",
    "Supplier",
    "StockMovement",
    "MovementType",
    "InventoryRecord",
    "SnapshotItem",
    "WasteLog",
    "WASTE_REASONS",
    "ShoppingItem",
]
