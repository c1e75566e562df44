"""
Recipe Cost Calculator

Derives a recipe's ingredient cost, CMV percentage and margin from the
current ingredient unit costs. Nothing is cached on the recipe.
"""
from typing import Mapping

from cmv_app.catalog import REMOVED_ITEM
from cmv_app.models import Ingredient, Recipe
from cmv_app.schemas.recipe import CmvStatus, RecipeCost, RecipeCostLine

GOOD_CMV_THRESHOLD = 28.0
CRITICAL_CMV_THRESHOLD = 35.0


def classify_cmv(cmv_percentage, good_threshold=GOOD_CMV_THRESHOLD, critical_threshold=CRITICAL_CMV_THRESHOLD):
    """
    Presentation bucket for a CMV percentage.

    <= good_threshold is good, up to critical_threshold is watch, above is critical.
    """
    if cmv_percentage > critical_threshold:
        return CmvStatus.CRITICAL
    if cmv_percentage > good_threshold:
        return CmvStatus.WATCH
    return CmvStatus.GOOD


def cmv_percentage(total_cost: float, sale_price: float) -> float:
    if sale_price <= 0:
        return 0.0
    return total_cost / sale_price * 100


def calculate_recipe_cost(
    recipe: Recipe,
    ingredients: Mapping[str, Ingredient],
    good_threshold: float = GOOD_CMV_THRESHOLD,
    critical_threshold: float = CRITICAL_CMV_THRESHOLD,
) -> RecipeCost:
    """
    Cost a recipe against an ingredient index (id -> Ingredient).

    Lines whose ingredient left the catalog contribute zero and are reported
    in missing_ingredient_ids and flagged as removed.
    """
    total_cost = 0.0
    lines = []
    missing = []

    for item in recipe.ingredients:
        ingredient = ingredients.get(item.ingredient_id)
        if ingredient is None:
            missing.append(item.ingredient_id)
            lines.append(RecipeCostLine(
                ingredient_id=item.ingredient_id,
                ingredient_name=REMOVED_ITEM,
                quantity=item.quantity,
                removed=True,
            ))
            continue

        subtotal = ingredient.cost_per_unit * item.quantity
        total_cost += subtotal
        lines.append(RecipeCostLine(
            ingredient_id=ingredient.id,
            ingredient_name=ingredient.name,
            unit=ingredient.unit,
            quantity=item.quantity,
            unit_cost=ingredient.cost_per_unit,
            subtotal=subtotal,
        ))

    percentage = cmv_percentage(total_cost, recipe.sale_price)
    status = None
    if recipe.sale_price > 0:
        status = classify_cmv(percentage, good_threshold, critical_threshold)

    cost_per_serving = None
    if recipe.yield_servings > 0:
        cost_per_serving = total_cost / recipe.yield_servings

    return RecipeCost(
        recipe_id=recipe.id,
        total_cost=total_cost,
        sale_price=recipe.sale_price,
        cmv_percentage=percentage,
        cmv_status=status,
        gross_margin=recipe.sale_price - total_cost,
        cost_per_serving=cost_per_serving,
        lines=lines,
        missing_ingredient_ids=missing,
    )
