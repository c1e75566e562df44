from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from cmv_app.catalog import EntityCatalog
from cmv_app.dependencies import get_catalog, get_advisory_service
from cmv_app.exceptions import EntityNotFound, InvalidQuantity, UnknownIngredientReference
from cmv_app.models import ShoppingItem
from cmv_app.schemas.advisory import AdvisoryResult
from cmv_app.schemas.shopping import ShoppingItemCreate, ShoppingStatusView, ShoppingSupplierGroup
from cmv_app.services import shopping
from cmv_app.services.advisory import AdvisoryService

router = APIRouter()


@router.get("/", response_model=List[ShoppingItem])
def get_shopping_list(
    catalog: EntityCatalog = Depends(get_catalog)
):
    """Shopping list in insertion order"""
    return catalog.shopping_items


@router.get("/by-status", response_model=ShoppingStatusView)
def get_shopping_list_by_status(
    catalog: EntityCatalog = Depends(get_catalog)
):
    """Items still to buy and items already bought"""
    return shopping.by_status(catalog.shopping_items)


@router.get("/by-supplier", response_model=List[ShoppingSupplierGroup])
def get_shopping_list_by_supplier(
    catalog: EntityCatalog = Depends(get_catalog)
):
    """Items grouped by supplier name"""
    return shopping.by_supplier(catalog.shopping_items)


@router.post("/populate", response_model=List[ShoppingItem])
def populate_shopping_list(
    catalog: EntityCatalog = Depends(get_catalog)
):
    """Add low-stock ingredients not already on the list"""
    return shopping.populate_from_low_stock(catalog)


@router.post("/", response_model=ShoppingItem, status_code=status.HTTP_201_CREATED)
def add_shopping_item(
    data: ShoppingItemCreate,
    catalog: EntityCatalog = Depends(get_catalog)
):
    """Add an ingredient to the list"""
    try:
        return shopping.add_item(catalog, data.ingredient_id, data.quantity)
    except InvalidQuantity as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)
    except UnknownIngredientReference:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")


@router.post("/{item_id}/toggle", response_model=ShoppingItem)
def toggle_shopping_item(
    item_id: str,
    catalog: EntityCatalog = Depends(get_catalog)
):
    """Mark an item as bought or back to buy"""
    try:
        return shopping.toggle_item(catalog, item_id)
    except EntityNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shopping item not found")


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_shopping_item(
    item_id: str,
    catalog: EntityCatalog = Depends(get_catalog)
):
    """Remove an item from the list"""
    try:
        catalog.remove_shopping_item(item_id)
    except EntityNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shopping item not found")


@router.post("/insights", response_model=AdvisoryResult)
def get_shopping_insights(
    catalog: EntityCatalog = Depends(get_catalog),
    advisory: AdvisoryService = Depends(get_advisory_service)
):
    """Purchasing suggestions for the low-stock ingredients"""
    low_stock = catalog.low_stock_ingredients()
    if not low_stock:
        return AdvisoryResult(text="No ingredients are below their minimum stock.", available=True)
    return advisory.generate_shopping_insights(low_stock)
