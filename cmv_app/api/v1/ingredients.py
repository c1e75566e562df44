from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List, Optional
from datetime import datetime
import logging

from cmv_app.catalog import EntityCatalog
from cmv_app.dependencies import get_catalog, get_now
from cmv_app.exceptions import EntityNotFound, UnknownIngredientReference
from cmv_app.models import Ingredient
from cmv_app.schemas.ingredient import (
    IngredientCreate,
    IngredientUpdate,
    IngredientResponse
)

router = APIRouter()
logger = logging.getLogger(__name__)


def ingredient_response(catalog: EntityCatalog, ingredient: Ingredient) -> dict:
    return {
        **ingredient.model_dump(),
        "supplier_name": catalog.supplier_name_for(ingredient),
        "is_low_stock": ingredient.is_low_stock,
        "stock_value": ingredient.stock_value
    }


def _check_supplier(catalog: EntityCatalog, supplier_id: Optional[str]) -> None:
    if supplier_id is None:
        return
    try:
        catalog.get_supplier(supplier_id)
    except EntityNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Supplier not found"
        )


def _get_or_404(catalog: EntityCatalog, ingredient_id: str) -> Ingredient:
    try:
        return catalog.get_ingredient(ingredient_id)
    except UnknownIngredientReference:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Ingredient not found"
        )


@router.get("/", response_model=List[IngredientResponse])
def get_all_ingredients(
    search: Optional[str] = Query(None, description="Search by ingredient or supplier name"),
    low_stock_only: bool = Query(False, description="Show only low stock items"),
    catalog: EntityCatalog = Depends(get_catalog)
):
    """Get all ingredients"""

    ingredients = catalog.ingredients

    if search:
        term = search.lower()
        ingredients = [
            i for i in ingredients
            if term in i.name.lower() or term in catalog.supplier_name_for(i).lower()
        ]

    if low_stock_only:
        ingredients = [i for i in ingredients if i.is_low_stock]

    return [ingredient_response(catalog, i) for i in ingredients]


@router.get("/{ingredient_id}", response_model=IngredientResponse)
def get_ingredient_by_id(
    ingredient_id: str,
    catalog: EntityCatalog = Depends(get_catalog)
):
    """Get ingredient by ID"""
    return ingredient_response(catalog, _get_or_404(catalog, ingredient_id))


@router.post("/", response_model=IngredientResponse, status_code=status.HTTP_201_CREATED)
def create_ingredient(
    data: IngredientCreate,
    catalog: EntityCatalog = Depends(get_catalog),
    now: datetime = Depends(get_now)
):
    """Create new ingredient"""

    _check_supplier(catalog, data.supplier_id)

    ingredient = catalog.add_ingredient(Ingredient(**data.model_dump(), last_updated=now))
    logger.info("Ingredient %s (%s) created", ingredient.id, ingredient.name)

    return ingredient_response(catalog, ingredient)


@router.put("/{ingredient_id}", response_model=IngredientResponse)
def update_ingredient(
    ingredient_id: str,
    data: IngredientUpdate,
    catalog: EntityCatalog = Depends(get_catalog),
    now: datetime = Depends(get_now)
):
    """Replace ingredient"""

    _get_or_404(catalog, ingredient_id)
    _check_supplier(catalog, data.supplier_id)

    ingredient = catalog.replace_ingredient(
        Ingredient(id=ingredient_id, **data.model_dump(), last_updated=now)
    )

    return ingredient_response(catalog, ingredient)


@router.delete("/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_ingredient(
    ingredient_id: str,
    catalog: EntityCatalog = Depends(get_catalog)
):
    """Delete ingredient; recipes and movements keep showing it as a removed item"""

    _get_or_404(catalog, ingredient_id)
    catalog.remove_ingredient(ingredient_id)
