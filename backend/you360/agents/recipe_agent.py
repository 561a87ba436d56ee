"""
Recipe Adapter - healthy recipe from a list of ingredients.
The latest recipe is persisted as the "last recipe" with a timestamp.
"""

import re
from datetime import datetime
from typing import Any, Dict, List

import pydantic

from .base_agent import BaseAdapter
from ..core.exceptions import ValidationError, MalformedResponse
from ..llm.base import AIRequest, AIResponse
from ..models.food import Recipe, LastRecipe

RECIPE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING"},
        "ingredientsList": {"type": "ARRAY", "items": {"type": "STRING"}},
        "instructions": {"type": "STRING"},
        "healthyNote": {"type": "STRING"},
    },
    "required": ["title", "ingredientsList", "instructions", "healthyNote"],
}

_STEP_MARKER = re.compile(r"\d+\.\s")


def split_instructions(instructions: str) -> List[str]:
    """Break "1. Do this 2. Do that" into individual steps."""
    return [step.strip() for step in _STEP_MARKER.split(instructions) if step.strip()]


def recipe_timestamp(now: datetime) -> str:
    """Human-readable timestamp stored with the last recipe."""
    return now.strftime("%d/%m/%Y, %H:%M:%S")


class RecipeAdapter(BaseAdapter):
    name = "recipe"
    error_message = "Failed to generate recipe. Please try again."

    def build_request(self, ingredients: str = "", **inputs: Any) -> AIRequest:
        if not ingredients or not ingredients.strip():
            raise ValidationError("Please enter some ingredients.")
        return AIRequest(
            prompt_text=(
                "Based on the following ingredients, suggest a healthy and easy-to-make recipe. "
                "Provide a short note on why it's healthy. Respond with a JSON object containing the "
                "following keys: \"title\", \"ingredientsList\" (an array of strings), \"instructions\" "
                "(a single string with step-by-step instructions), and \"healthyNote\". Do not include "
                "any other text or markdown.\n"
                f"Ingredients: {ingredients.strip()}"
            ),
            response_schema=RECIPE_SCHEMA,
        )

    async def map_response(self, response: AIResponse, **inputs: Any) -> Dict[str, Any]:
        try:
            recipe = Recipe(**response.fields)
        except pydantic.ValidationError as e:
            raise MalformedResponse(f"Recipe reply does not match the expected fields: {e.error_count()} error(s)") from e

        last_recipe = LastRecipe(**recipe.model_dump(), timestamp=recipe_timestamp(datetime.now()))
        if self.session is not None and self.session.recipe_store is not None:
            await self.session.recipe_store.save(last_recipe)

        display = last_recipe.model_dump()
        display["steps"] = split_instructions(recipe.instructions)
        return display

    def success_message(self, display: Dict[str, Any]) -> str:
        return display["title"]
