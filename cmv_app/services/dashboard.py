"""Dashboard figures derived from the catalog"""
from typing import Optional

from cmv_app.catalog import EntityCatalog
from cmv_app.services.recipe_cost import calculate_recipe_cost
from cmv_app.services.waste import total_waste_cost

LOW_STOCK_PREVIEW = 4


def average_recipe_cmv(catalog: EntityCatalog) -> Optional[float]:
    """Mean CMV % over recipes that have a sale price"""
    index = catalog.ingredient_index()
    percentages = [
        calculate_recipe_cost(recipe, index).cmv_percentage
        for recipe in catalog.recipes
        if recipe.sale_price > 0
    ]
    if not percentages:
        return None
    return sum(percentages) / len(percentages)


def dashboard_figures(catalog: EntityCatalog) -> dict:
    low_stock = catalog.low_stock_ingredients()
    latest_record = max(catalog.inventory_records, key=lambda r: r.date, default=None)
    return {
        "ingredient_count": len(catalog.ingredients),
        "low_stock_count": len(low_stock),
        "low_stock_items": low_stock[:LOW_STOCK_PREVIEW],
        "inventory_value": sum(i.stock_value for i in catalog.ingredients),
        "recipe_count": len(catalog.recipes),
        "average_recipe_cmv": average_recipe_cmv(catalog),
        "total_waste_cost": total_waste_cost(catalog.waste_logs),
        "latest_inventory_record": latest_record,
    }
