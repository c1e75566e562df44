from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List, Optional
from datetime import datetime

from cmv_app.catalog import EntityCatalog
from cmv_app.config import settings
from cmv_app.dependencies import get_catalog, get_now, get_advisory_service
from cmv_app.exceptions import EntityNotFound, InvalidQuantity, UnknownIngredientReference
from cmv_app.models import Recipe
from cmv_app.schemas.advisory import AdvisoryResult
from cmv_app.schemas.recipe import (
    RecipeCreate,
    RecipeUpdate,
    RecipeResponse,
    RecipeIngredientIn,
    RecipeIngredientQuantity,
    RecipeCost
)
from cmv_app.services import recipes as recipe_service
from cmv_app.services.advisory import AdvisoryService
from cmv_app.services.recipe_cost import calculate_recipe_cost

router = APIRouter()


def _cost(catalog: EntityCatalog, recipe: Recipe) -> RecipeCost:
    return calculate_recipe_cost(
        recipe,
        catalog.ingredient_index(),
        good_threshold=settings.CMV_GOOD_THRESHOLD,
        critical_threshold=settings.CMV_CRITICAL_THRESHOLD
    )


def _recipe_response(catalog: EntityCatalog, recipe: Recipe) -> dict:
    return {**recipe.model_dump(), "cost": _cost(catalog, recipe)}


def _get_or_404(catalog: EntityCatalog, recipe_id: str) -> Recipe:
    try:
        return catalog.get_recipe(recipe_id)
    except EntityNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Recipe not found"
        )


def _edit(operation, *args):
    """Run a recipe edit, mapping domain errors to HTTP errors"""
    try:
        return operation(*args)
    except EntityNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
    except UnknownIngredientReference as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)
    except InvalidQuantity as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)


@router.get("/", response_model=List[RecipeResponse])
def get_all_recipes(
    category: Optional[str] = Query(None, description="Filter by category"),
    catalog: EntityCatalog = Depends(get_catalog)
):
    """Get all recipes with their current cost"""

    recipes = catalog.recipes

    if category:
        recipes = [r for r in recipes if r.category == category]

    return [_recipe_response(catalog, r) for r in recipes]


@router.get("/categories")
def get_recipe_categories(
    catalog: EntityCatalog = Depends(get_catalog)
):
    """Get list of unique recipe categories"""
    return {"categories": sorted({r.category for r in catalog.recipes if r.category})}


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe_by_id(
    recipe_id: str,
    catalog: EntityCatalog = Depends(get_catalog)
):
    """Get recipe by ID"""
    return _recipe_response(catalog, _get_or_404(catalog, recipe_id))


@router.get("/{recipe_id}/cost", response_model=RecipeCost)
def get_recipe_cost(
    recipe_id: str,
    catalog: EntityCatalog = Depends(get_catalog)
):
    """Cost sheet computed from current ingredient costs"""
    return _cost(catalog, _get_or_404(catalog, recipe_id))


@router.post("/", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
def create_recipe(
    data: RecipeCreate,
    catalog: EntityCatalog = Depends(get_catalog),
    now: datetime = Depends(get_now)
):
    """Create new recipe"""
    recipe = _edit(recipe_service.create_recipe, catalog, data, now)
    return _recipe_response(catalog, recipe)


@router.put("/{recipe_id}", response_model=RecipeResponse)
def update_recipe(
    recipe_id: str,
    data: RecipeUpdate,
    catalog: EntityCatalog = Depends(get_catalog),
    now: datetime = Depends(get_now)
):
    """Save recipe wholesale (ingredient list, price and details)"""
    recipe = _edit(recipe_service.update_recipe, catalog, recipe_id, data, now)
    return _recipe_response(catalog, recipe)


@router.post("/{recipe_id}/ingredients", response_model=RecipeResponse)
def add_recipe_ingredient(
    recipe_id: str,
    data: RecipeIngredientIn,
    catalog: EntityCatalog = Depends(get_catalog),
    now: datetime = Depends(get_now)
):
    """Add an ingredient line; an ingredient already on the recipe is left as is"""
    recipe = _edit(
        recipe_service.add_recipe_ingredient, catalog, recipe_id, data.ingredient_id, data.quantity, now
    )
    return _recipe_response(catalog, recipe)


@router.patch("/{recipe_id}/ingredients/{ingredient_id}", response_model=RecipeResponse)
def update_recipe_ingredient(
    recipe_id: str,
    ingredient_id: str,
    data: RecipeIngredientQuantity,
    catalog: EntityCatalog = Depends(get_catalog),
    now: datetime = Depends(get_now)
):
    """Change the quantity of one ingredient line"""
    recipe = _edit(
        recipe_service.set_recipe_ingredient_quantity, catalog, recipe_id, ingredient_id, data.quantity, now
    )
    return _recipe_response(catalog, recipe)


@router.delete("/{recipe_id}/ingredients/{ingredient_id}", response_model=RecipeResponse)
def remove_recipe_ingredient(
    recipe_id: str,
    ingredient_id: str,
    catalog: EntityCatalog = Depends(get_catalog),
    now: datetime = Depends(get_now)
):
    """Remove an ingredient line"""
    recipe = _edit(recipe_service.remove_recipe_ingredient, catalog, recipe_id, ingredient_id, now)
    return _recipe_response(catalog, recipe)


@router.post("/{recipe_id}/advisory", response_model=AdvisoryResult)
def analyze_recipe(
    recipe_id: str,
    catalog: EntityCatalog = Depends(get_catalog),
    advisory: AdvisoryService = Depends(get_advisory_service)
):
    """Ask the advisory service for pricing and CMV suggestions"""
    recipe = _get_or_404(catalog, recipe_id)
    return advisory.analyze_recipe_cost(recipe, catalog.ingredients)
