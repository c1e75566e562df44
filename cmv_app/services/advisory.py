"""
Advisory text service backed by Google Gemini.

Best effort: a missing API key or any client failure becomes a placeholder
text with available=False. Callers apply their own timeout and retry policy.
"""
import logging
from typing import Any, List, Optional

import google.generativeai as genai

from cmv_app.exceptions import AdvisoryServiceUnavailable
from cmv_app.models import Ingredient, Recipe
from cmv_app.schemas.advisory import AdvisoryResult

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "Advisory service is not configured. Add a Gemini API key."
RECIPE_FAILURE_MESSAGE = "The recipe could not be analyzed right now."
SHOPPING_FAILURE_MESSAGE = "Shopping insights could not be generated right now."


def build_recipe_prompt(recipe: Recipe, ingredients: List[Ingredient], currency: str = "R$") -> str:
    index = {i.id: i for i in ingredients}
    lines = []
    for item in recipe.ingredients:
        ingredient = index.get(item.ingredient_id)
        if ingredient is None:
            lines.append(f"Unknown: {item.quantity}")
        else:
            lines.append(f"{ingredient.name}: {item.quantity} {ingredient.unit.value}")

    return (
        "Act as an executive chef and financial consultant for high-performance restaurants.\n"
        "Analyze the following recipe cost sheet:\n\n"
        f"Dish: {recipe.name}\n"
        f"Sale price: {currency} {recipe.sale_price:.2f}\n"
        f"Ingredients:\n{', '.join(lines)}\n\n"
        "Give a short, direct analysis (150 words at most) covering:\n"
        "1. Whether the sale price looks adequate for typical ingredient costs.\n"
        "2. Two substitutions or techniques that reduce CMV without losing much quality.\n"
        "3. One marketing tip to sell this dish.\n\n"
        "Return Markdown formatted text."
    )


def build_shopping_prompt(low_stock: List[Ingredient]) -> str:
    items = "\n".join(
        f"- {i.name} (Stock: {i.current_stock} {i.unit.value}, Min: {i.min_stock} {i.unit.value})"
        for i in low_stock
    )
    return (
        "Analyze this list of restaurant ingredients with low or critical stock:\n"
        f"{items}\n\n"
        "Suggest a quick purchasing strategy. Group the items by likely supplier type "
        "(e.g. butcher, produce, dry goods) and give one tip on seasonality or negotiation "
        "for one of them. Be brief."
    )


class AdvisoryService:
    """Thin wrapper around the Gemini SDK"""

    def __init__(
        self,
        api_key: Optional[str],
        model_name: str = "gemini-1.5-flash",
        request_timeout: int = 45,
        currency: str = "R$",
        model: Any = None,
    ):
        self.api_key = api_key
        self.model_name = model_name
        self.request_timeout = request_timeout
        self.currency = currency
        self._model = model

    @property
    def configured(self) -> bool:
        return bool(self.api_key) or self._model is not None

    def _get_model(self):
        if self._model is None:
            if not self.api_key:
                raise AdvisoryServiceUnavailable(NOT_CONFIGURED_MESSAGE)
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name)
        return self._model

    def generate_text(self, prompt: str) -> str:
        model = self._get_model()
        try:
            response = model.generate_content(prompt, request_options={"timeout": self.request_timeout})
        except Exception as exc:
            raise AdvisoryServiceUnavailable(f"Gemini request failed: {exc}") from exc
        return getattr(response, "text", "") or ""

    def _advise(self, prompt: str, failure_message: str) -> AdvisoryResult:
        if not self.configured:
            return AdvisoryResult(text=NOT_CONFIGURED_MESSAGE, available=False)
        try:
            return AdvisoryResult(text=self.generate_text(prompt))
        except AdvisoryServiceUnavailable:
            logger.warning("Advisory request failed", exc_info=True)
            return AdvisoryResult(text=failure_message, available=False)

    def analyze_recipe_cost(self, recipe: Recipe, ingredients: List[Ingredient]) -> AdvisoryResult:
        return self._advise(build_recipe_prompt(recipe, ingredients, self.currency), RECIPE_FAILURE_MESSAGE)

    def generate_shopping_insights(self, low_stock: List[Ingredient]) -> AdvisoryResult:
        return self._advise(build_shopping_prompt(low_stock), SHOPPING_FAILURE_MESSAGE)
