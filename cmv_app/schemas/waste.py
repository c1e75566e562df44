from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class WasteCreate(BaseModel):
    ingredient_id: str
    quantity: float
    reason: str
    responsible: str = ""
    date: Optional[datetime] = None


class WasteLogResponse(BaseModel):
    id: str
    ingredient_id: str
    ingredient_name: str
    quantity: float
    cost: float
    reason: str
    responsible: str
    date: datetime


class WasteSummary(BaseModel):
    total_cost: float
    total_logs: int
    logs: List[WasteLogResponse] = []
