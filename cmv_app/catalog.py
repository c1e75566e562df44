"""
Entity Catalog

In-memory store that owns every collection of the dashboard. Components
receive the catalog explicitly and mutate it only through these methods:
append, replace-by-id and remove. Records are replaced whole, never patched.
"""
import logging
from typing import Dict, List, Optional

from cmv_app.exceptions import EntityNotFound, UnknownIngredientReference
from cmv_app.models import (
    Ingredient,
    Recipe,
    Supplier,
    StockMovement,
    InventoryRecord,
    WasteLog,
    ShoppingItem,
)

logger = logging.getLogger(__name__)

UNASSIGNED_SUPPLIER = "unassigned"
REMOVED_ITEM = "removed item"


def _replace(items: list, new_item, entity: str) -> None:
    for idx, item in enumerate(items):
        if item.id == new_item.id:
            items[idx] = new_item
            return
    raise EntityNotFound(entity, new_item.id)


def _find(items: list, item_id: str):
    return next((item for item in items if item.id == item_id), None)


class EntityCatalog:

    def __init__(
        self,
        ingredients: Optional[List[Ingredient]] = None,
        recipes: Optional[List[Recipe]] = None,
        suppliers: Optional[List[Supplier]] = None,
    ):
        self.ingredients: List[Ingredient] = list(ingredients or [])
        self.recipes: List[Recipe] = list(recipes or [])
        self.suppliers: List[Supplier] = list(suppliers or [])
        # Insertion order only; consumers sort by date themselves
        self.movements: List[StockMovement] = []
        self.inventory_records: List[InventoryRecord] = []
        self.waste_logs: List[WasteLog] = []
        self.shopping_items: List[ShoppingItem] = []

    # Ingredients

    def add_ingredient(self, ingredient: Ingredient) -> Ingredient:
        self.ingredients.append(ingredient)
        return ingredient

    def replace_ingredient(self, ingredient: Ingredient) -> Ingredient:
        _replace(self.ingredients, ingredient, "Ingredient")
        return ingredient

    def remove_ingredient(self, ingredient_id: str) -> None:
        # Movements, waste logs and recipe lines keep their weak references
        ingredient = self.get_ingredient(ingredient_id)
        self.ingredients.remove(ingredient)
        logger.info("Ingredient %s (%s) removed from catalog", ingredient.id, ingredient.name)

    def find_ingredient(self, ingredient_id: str) -> Optional[Ingredient]:
        return _find(self.ingredients, ingredient_id)

    def get_ingredient(self, ingredient_id: str) -> Ingredient:
        ingredient = self.find_ingredient(ingredient_id)
        if ingredient is None:
            raise UnknownIngredientReference(ingredient_id)
        return ingredient

    def ingredient_index(self) -> Dict[str, Ingredient]:
        return {ingredient.id: ingredient for ingredient in self.ingredients}

    def ingredient_name(self, ingredient_id: str) -> str:
        ingredient = self.find_ingredient(ingredient_id)
        return ingredient.name if ingredient else REMOVED_ITEM

    def low_stock_ingredients(self) -> List[Ingredient]:
        return [i for i in self.ingredients if i.is_low_stock]

    # Recipes

    def add_recipe(self, recipe: Recipe) -> Recipe:
        self.recipes.append(recipe)
        return recipe

    def replace_recipe(self, recipe: Recipe) -> Recipe:
        _replace(self.recipes, recipe, "Recipe")
        return recipe

    def get_recipe(self, recipe_id: str) -> Recipe:
        recipe = _find(self.recipes, recipe_id)
        if recipe is None:
            raise EntityNotFound("Recipe", recipe_id)
        return recipe

    # Suppliers

    def get_supplier(self, supplier_id: str) -> Supplier:
        supplier = _find(self.suppliers, supplier_id)
        if supplier is None:
            raise EntityNotFound("Supplier", supplier_id)
        return supplier

    def supplier_index(self) -> Dict[str, Supplier]:
        return {supplier.id: supplier for supplier in self.suppliers}

    def supplier_name_for(self, ingredient: Ingredient) -> str:
        if ingredient.supplier_id is None:
            return UNASSIGNED_SUPPLIER
        supplier = self.supplier_index().get(ingredient.supplier_id)
        return supplier.name if supplier else UNASSIGNED_SUPPLIER

    # Ledger and records (append only)

    def add_movement(self, movement: StockMovement) -> StockMovement:
        self.movements.append(movement)
        return movement

    def add_inventory_record(self, record: InventoryRecord) -> InventoryRecord:
        self.inventory_records.append(record)
        return record

    def get_inventory_record(self, record_id: str) -> InventoryRecord:
        record = _find(self.inventory_records, record_id)
        if record is None:
            raise EntityNotFound("Inventory record", record_id)
        return record

    def add_waste_log(self, log: WasteLog) -> WasteLog:
        self.waste_logs.append(log)
        return log

    # Shopping list

    def add_shopping_item(self, item: ShoppingItem) -> ShoppingItem:
        self.shopping_items.append(item)
        return item

    def replace_shopping_item(self, item: ShoppingItem) -> ShoppingItem:
        _replace(self.shopping_items, item, "Shopping item")
        return item

    def get_shopping_item(self, item_id: str) -> ShoppingItem:
        item = _find(self.shopping_items, item_id)
        if item is None:
            raise EntityNotFound("Shopping item", item_id)
        return item

    def remove_shopping_item(self, item_id: str) -> None:
        self.shopping_items.remove(self.get_shopping_item(item_id))


def create_catalog(seed: bool = True) -> EntityCatalog:
    """Build a catalog, optionally loaded with the demo seed data"""
    if not seed:
        return EntityCatalog()

    from cmv_app.seed import seed_ingredients, seed_recipes, seed_suppliers

    catalog = EntityCatalog(
        ingredients=seed_ingredients(),
        recipes=seed_recipes(),
        suppliers=seed_suppliers(),
    )
    logger.info(
        "Catalog seeded with %d ingredients, %d recipes, %d suppliers",
        len(catalog.ingredients), len(catalog.recipes), len(catalog.suppliers),
    )
    return catalog
