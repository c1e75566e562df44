from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from datetime import datetime
from enum import Enum

from cmv_app.models.inventory import MovementType


class MovementCreate(BaseModel):
    ingredient_id: str
    type: MovementType
    quantity: float
    date: Optional[datetime] = None
    unit_price: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None


class MovementResponse(BaseModel):
    id: str
    ingredient_id: str
    ingredient_name: str
    ingredient_removed: bool = False
    type: MovementType
    quantity: float
    value: float
    date: datetime
    description: Optional[str] = None


class PricePoint(BaseModel):
    label: str
    date: datetime
    price: float
    is_current: bool = False


class AuditState(str, Enum):
    IDLE = "IDLE"
    COUNTING = "COUNTING"


class AuditCount(BaseModel):
    ingredient_id: str
    quantity: float


class VarianceStatus(str, Enum):
    MATCH = "match"
    SURPLUS = "surplus"
    SHORTAGE = "shortage"


class AuditVariance(BaseModel):
    ingredient_id: str
    ingredient_name: str
    system_stock: float
    counted: float
    diff: float
    status: VarianceStatus


class AuditStatusResponse(BaseModel):
    state: AuditState
    counts: Dict[str, float] = {}


class SnapshotItemResponse(BaseModel):
    ingredient_id: str
    ingredient_name: str
    quantity: float
    cost: float


class InventoryRecordResponse(BaseModel):
    id: str
    date: datetime
    total_value: float
    items_counted: int
    snapshot: List[SnapshotItemResponse] = []
