from pydantic import BaseModel, Field
from typing import List, Optional

from cmv_app.models.base import LocalDatetime, new_id


class RecipeIngredient(BaseModel):
    ingredient_id: str
    # Expressed in the ingredient's own unit
    quantity: float = Field(ge=0)


class Recipe(BaseModel):
    """Ficha técnica: ingredient lines plus sale data. Cost is never stored here."""
    id: str = Field(default_factory=new_id)
    name: str
    category: str = ""
    ingredients: List[RecipeIngredient] = []
    preparation_time_minutes: int = Field(default=0, ge=0)
    yield_servings: int = Field(default=1, ge=0)
    sale_price: float = Field(default=0, ge=0)
    instructions: str = ""
    last_revision: Optional[LocalDatetime] = None

    def has_ingredient(self, ingredient_id: str) -> bool:
        return any(line.ingredient_id == ingredient_id for line in self.ingredients)
