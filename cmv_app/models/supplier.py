from pydantic import BaseModel, Field

from cmv_app.models.base import new_id


class Supplier(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str
    contact: str = ""
    category: str = ""
    rating: float = Field(default=0, ge=0, le=5)
