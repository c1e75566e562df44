from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List, Optional

from cmv_app.catalog import EntityCatalog
from cmv_app.dependencies import get_catalog
from cmv_app.exceptions import EntityNotFound
from cmv_app.models import Supplier
from cmv_app.schemas.ingredient import IngredientResponse
from cmv_app.schemas.supplier import SupplierResponse
from cmv_app.api.v1.ingredients import ingredient_response

router = APIRouter()


def _supplier_response(catalog: EntityCatalog, supplier: Supplier) -> dict:
    return {
        **supplier.model_dump(),
        "ingredient_count": sum(1 for i in catalog.ingredients if i.supplier_id == supplier.id)
    }


def _get_or_404(catalog: EntityCatalog, supplier_id: str) -> Supplier:
    try:
        return catalog.get_supplier(supplier_id)
    except EntityNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Supplier not found"
        )


@router.get("/", response_model=List[SupplierResponse])
def get_all_suppliers(
    search: Optional[str] = Query(None, description="Search by name"),
    category: Optional[str] = Query(None, description="Filter by category"),
    catalog: EntityCatalog = Depends(get_catalog)
):
    """Get all suppliers"""

    suppliers = catalog.suppliers

    if search:
        suppliers = [s for s in suppliers if search.lower() in s.name.lower()]

    if category:
        suppliers = [s for s in suppliers if s.category == category]

    return [_supplier_response(catalog, s) for s in sorted(suppliers, key=lambda s: s.name)]


@router.get("/{supplier_id}", response_model=SupplierResponse)
def get_supplier_by_id(
    supplier_id: str,
    catalog: EntityCatalog = Depends(get_catalog)
):
    """Get supplier by ID"""
    return _supplier_response(catalog, _get_or_404(catalog, supplier_id))


@router.get("/{supplier_id}/ingredients", response_model=List[IngredientResponse])
def get_supplier_ingredients(
    supplier_id: str,
    catalog: EntityCatalog = Depends(get_catalog)
):
    """Ingredients linked to a supplier"""

    supplier = _get_or_404(catalog, supplier_id)

    return [
        ingredient_response(catalog, i)
        for i in catalog.ingredients
        if i.supplier_id == supplier.id
    ]
