from pydantic import BaseModel


class SupplierResponse(BaseModel):
    id: str
    name: str
    contact: str
    category: str
    rating: float
    ingredient_count: int = 0

    class Config:
        from_attributes = True
