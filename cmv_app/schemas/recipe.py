from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from enum import Enum

from cmv_app.models.ingredient import Unit


class CmvStatus(str, Enum):
    GOOD = "good"
    WATCH = "watch"
    CRITICAL = "critical"


class RecipeIngredientIn(BaseModel):
    ingredient_id: str
    quantity: float = Field(ge=0)


class RecipeBase(BaseModel):
    name: str = Field(min_length=1)
    category: str = ""
    preparation_time_minutes: int = Field(default=0, ge=0)
    yield_servings: int = Field(default=1, ge=0)
    sale_price: float = Field(default=0, ge=0)
    instructions: str = ""


class RecipeCreate(RecipeBase):
    ingredients: List[RecipeIngredientIn] = []


class RecipeUpdate(RecipeCreate):
    """Saved wholesale: replaces the ingredient list and the price"""
    pass


class RecipeIngredientQuantity(BaseModel):
    quantity: float = Field(ge=0)


class RecipeCostLine(BaseModel):
    ingredient_id: str
    ingredient_name: str
    unit: Optional[Unit] = None
    quantity: float
    unit_cost: float = 0
    subtotal: float = 0
    removed: bool = False


class RecipeCost(BaseModel):
    recipe_id: str
    total_cost: float
    sale_price: float
    cmv_percentage: float
    # None when the sale price is zero and the ratio is not computable
    cmv_status: Optional[CmvStatus] = None
    gross_margin: float
    cost_per_serving: Optional[float] = None
    lines: List[RecipeCostLine] = []
    missing_ingredient_ids: List[str] = []


class RecipeIngredientResponse(BaseModel):
    ingredient_id: str
    quantity: float


class RecipeResponse(RecipeBase):
    id: str
    ingredients: List[RecipeIngredientResponse] = []
    last_revision: Optional[datetime] = None
    cost: Optional[RecipeCost] = None

    class Config:
        from_attributes = True
