"""
Food Models - food-image scan and recipe generation replies.

Field names follow the JSON keys the AI is asked to return.
"""

from enum import Enum
from typing import List
from pydantic import BaseModel, Field


class HealthRating(str, Enum):
    HEALTHY = "Healthy"
    JUNK_FOOD = "Junk Food"


class FoodScanResult(BaseModel):
    """Nutrition estimate for a scanned food photo."""
    foodName: str
    calories: str
    carbs: str
    protein: str
    fats: str
    healthRating: HealthRating
    tips: List[str] = Field(default_factory=list)


class RecipeRequest(BaseModel):
    ingredients: str = ""


class Recipe(BaseModel):
    """A generated recipe."""
    title: str
    ingredientsList: List[str] = Field(default_factory=list)
    instructions: str
    healthyNote: str


class LastRecipe(Recipe):
    """The most recent recipe, persisted with a human-readable timestamp."""
    timestamp: str
