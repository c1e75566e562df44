from pydantic import BaseModel, Field
from typing import List

from cmv_app.models.shopping import ShoppingItem


class ShoppingItemCreate(BaseModel):
    ingredient_id: str
    quantity: float = Field(default=1, gt=0)


class ShoppingStatusView(BaseModel):
    to_buy: List[ShoppingItem] = []
    bought: List[ShoppingItem] = []


class ShoppingSupplierGroup(BaseModel):
    supplier_name: str
    items: List[ShoppingItem] = []
