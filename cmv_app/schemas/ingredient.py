from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from cmv_app.models.ingredient import Unit


class IngredientBase(BaseModel):
    name: str = Field(min_length=1)
    unit: Unit
    cost_per_unit: float = Field(ge=0)
    current_stock: float = Field(default=0, ge=0)
    min_stock: float = Field(default=0, ge=0)
    supplier_id: Optional[str] = None


class IngredientCreate(IngredientBase):
    pass


class IngredientUpdate(IngredientBase):
    """Whole-record replacement"""
    pass


class IngredientResponse(IngredientBase):
    id: str
    last_updated: datetime
    supplier_name: str
    is_low_stock: bool
    stock_value: float

    class Config:
        from_attributes = True
