from pydantic import BaseModel, Field

from cmv_app.models.base import LocalDatetime, new_id


# Suggested reasons; any other free text is accepted
WASTE_REASONS = [
    "Expiration",
    "Improper Storage",
    "Production Error",
    "Breakage/Drop",
]


class WasteLog(BaseModel):
    id: str = Field(default_factory=new_id)
    ingredient_id: str
    quantity: float = Field(gt=0)
    cost: float
    reason: str
    responsible: str = ""
    date: LocalDatetime

    class Config:
        frozen = True
