from pydantic import BaseModel
from datetime import datetime


class CmvReport(BaseModel):
    start_record_id: str
    end_record_id: str
    start_date: datetime
    end_date: datetime
    initial_inventory: float
    purchases: float
    purchases_count: int
    available_for_sale: float
    final_inventory: float
    # May be negative when purchases were misrecorded; never clamped
    cmv: float
