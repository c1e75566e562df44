from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum

from cmv_app.models.base import LocalDatetime, new_id


class Unit(str, Enum):
    KG = "kg"
    G = "g"
    L = "L"
    ML = "ml"
    UN = "un"


class Ingredient(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str
    unit: Unit
    cost_per_unit: float = Field(ge=0)
    current_stock: float = Field(default=0, ge=0)
    min_stock: float = Field(default=0, ge=0)
    supplier_id: Optional[str] = None
    last_updated: LocalDatetime

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= self.min_stock

    @property
    def stock_value(self) -> float:
        return self.current_stock * self.cost_per_unit
