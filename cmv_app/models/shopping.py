from pydantic import BaseModel, Field
from typing import Optional

from cmv_app.models.base import new_id
from cmv_app.models.ingredient import Unit


class ShoppingItem(BaseModel):
    id: str = Field(default_factory=new_id)
    ingredient_id: Optional[str] = None
    name: str
    quantity: float = Field(gt=0)
    unit: Unit
    supplier_name: str
    checked: bool = False
