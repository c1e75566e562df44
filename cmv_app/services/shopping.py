"""Shopping list built from low-stock ingredients or added by hand"""
import logging
from typing import List

from cmv_app.catalog import EntityCatalog, UNASSIGNED_SUPPLIER
from cmv_app.models import Ingredient, ShoppingItem
from cmv_app.schemas.shopping import ShoppingStatusView, ShoppingSupplierGroup
from cmv_app.services.stock_ledger import validate_quantity

logger = logging.getLogger(__name__)


def suggested_quantity(ingredient: Ingredient) -> float:
    """Buy back up to twice the minimum, at least one unit"""
    return max(1.0, ingredient.min_stock * 2 - ingredient.current_stock)


def _item_for(catalog: EntityCatalog, ingredient: Ingredient, quantity: float) -> ShoppingItem:
    return ShoppingItem(
        ingredient_id=ingredient.id,
        name=ingredient.name,
        quantity=quantity,
        unit=ingredient.unit,
        supplier_name=catalog.supplier_name_for(ingredient),
    )


def populate_from_low_stock(catalog: EntityCatalog) -> List[ShoppingItem]:
    """Add every low-stock ingredient not already listed; returns the new items"""
    listed = {item.ingredient_id for item in catalog.shopping_items}
    added = []
    for ingredient in catalog.low_stock_ingredients():
        if ingredient.id in listed:
            continue
        added.append(catalog.add_shopping_item(_item_for(catalog, ingredient, suggested_quantity(ingredient))))
    logger.info("Shopping list populated with %d low-stock items", len(added))
    return added


def add_item(catalog: EntityCatalog, ingredient_id: str, quantity) -> ShoppingItem:
    quantity = validate_quantity(quantity)
    ingredient = catalog.get_ingredient(ingredient_id)
    return catalog.add_shopping_item(_item_for(catalog, ingredient, quantity))


def toggle_item(catalog: EntityCatalog, item_id: str) -> ShoppingItem:
    item = catalog.get_shopping_item(item_id)
    return catalog.replace_shopping_item(item.model_copy(update={"checked": not item.checked}))


def by_status(items: List[ShoppingItem]) -> ShoppingStatusView:
    return ShoppingStatusView(
        to_buy=[i for i in items if not i.checked],
        bought=[i for i in items if i.checked],
    )


def by_supplier(items: List[ShoppingItem]) -> List[ShoppingSupplierGroup]:
    names = sorted({item.supplier_name or UNASSIGNED_SUPPLIER for item in items})
    return [
        ShoppingSupplierGroup(
            supplier_name=name,
            items=[i for i in items if (i.supplier_name or UNASSIGNED_SUPPLIER) == name],
        )
        for name in names
    ]
