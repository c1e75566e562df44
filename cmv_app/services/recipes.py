"""Recipe (ficha técnica) editing operations over the catalog"""
import logging
from datetime import datetime
from typing import Iterable

from cmv_app.catalog import EntityCatalog
from cmv_app.exceptions import InvalidQuantity
from cmv_app.models import Recipe, RecipeIngredient
from cmv_app.schemas.recipe import RecipeCreate, RecipeUpdate

logger = logging.getLogger(__name__)


def unique_lines(lines: Iterable) -> list:
    """Keep the first line per ingredient; later duplicates are dropped"""
    seen = set()
    result = []
    for line in lines:
        if line.ingredient_id in seen:
            continue
        seen.add(line.ingredient_id)
        result.append(RecipeIngredient(ingredient_id=line.ingredient_id, quantity=line.quantity))
    return result


def _check_references(catalog: EntityCatalog, lines: Iterable) -> None:
    for line in lines:
        catalog.get_ingredient(line.ingredient_id)


def create_recipe(catalog: EntityCatalog, data: RecipeCreate, now: datetime) -> Recipe:
    _check_references(catalog, data.ingredients)
    recipe = Recipe(
        **data.model_dump(exclude={"ingredients"}),
        ingredients=unique_lines(data.ingredients),
        last_revision=now,
    )
    catalog.add_recipe(recipe)
    logger.info("Recipe %s (%s) created", recipe.id, recipe.name)
    return recipe


def update_recipe(catalog: EntityCatalog, recipe_id: str, data: RecipeUpdate, now: datetime) -> Recipe:
    existing = catalog.get_recipe(recipe_id)
    _check_references(catalog, data.ingredients)
    recipe = Recipe(
        id=existing.id,
        **data.model_dump(exclude={"ingredients"}),
        ingredients=unique_lines(data.ingredients),
        last_revision=now,
    )
    catalog.replace_recipe(recipe)
    logger.info("Recipe %s (%s) saved", recipe.id, recipe.name)
    return recipe


def add_recipe_ingredient(catalog: EntityCatalog, recipe_id: str, ingredient_id: str,
                          quantity: float, now: datetime) -> Recipe:
    """Append a line; adding an ingredient already on the recipe changes nothing"""
    recipe = catalog.get_recipe(recipe_id)
    catalog.get_ingredient(ingredient_id)
    if quantity < 0:
        raise InvalidQuantity(quantity)
    if recipe.has_ingredient(ingredient_id):
        return recipe

    lines = recipe.ingredients + [RecipeIngredient(ingredient_id=ingredient_id, quantity=quantity)]
    return catalog.replace_recipe(recipe.model_copy(update={"ingredients": lines, "last_revision": now}))


def remove_recipe_ingredient(catalog: EntityCatalog, recipe_id: str, ingredient_id: str, now: datetime) -> Recipe:
    recipe = catalog.get_recipe(recipe_id)
    lines = [line for line in recipe.ingredients if line.ingredient_id != ingredient_id]
    return catalog.replace_recipe(recipe.model_copy(update={"ingredients": lines, "last_revision": now}))


def set_recipe_ingredient_quantity(catalog: EntityCatalog, recipe_id: str, ingredient_id: str,
                                   quantity: float, now: datetime) -> Recipe:
    recipe = catalog.get_recipe(recipe_id)
    if quantity < 0:
        raise InvalidQuantity(quantity)
    lines = [
        RecipeIngredient(ingredient_id=line.ingredient_id, quantity=quantity)
        if line.ingredient_id == ingredient_id else line
        for line in recipe.ingredients
    ]
    return catalog.replace_recipe(recipe.model_copy(update={"ingredients": lines, "last_revision": now}))
