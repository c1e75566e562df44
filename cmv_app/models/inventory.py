from pydantic import BaseModel, Field
from typing import List, Optional
from enum import Enum

from cmv_app.models.base import LocalDatetime, new_id


class MovementType(str, Enum):
    IN = "IN"    # purchase / receipt
    OUT = "OUT"  # consumption / sale


class StockMovement(BaseModel):
    id: str = Field(default_factory=new_id)
    ingredient_id: str
    type: MovementType
    quantity: float = Field(gt=0)
    value: float
    date: LocalDatetime
    description: Optional[str] = None

    class Config:
        frozen = True


class SnapshotItem(BaseModel):
    ingredient_id: str
    quantity: float
    cost: float

    class Config:
        frozen = True


class InventoryRecord(BaseModel):
    id: str = Field(default_factory=new_id)
    date: LocalDatetime
    total_value: float
    items_counted: int
    snapshot: List[SnapshotItem] = []

    class Config:
        frozen = True
