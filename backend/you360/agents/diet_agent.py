"""
Diet Adapter - estimates the blood-sugar impact of a meal.

On success the session's glucose reading is replaced by a rough post-meal
estimate, which feeds back into the wellness score.
"""

import random
from typing import Any, Dict, Optional

from .base_agent import BaseAdapter
from ..core.exceptions import ValidationError
from ..llm.base import AIRequest, AIResponse
from ..llm.gateway import AIGateway

POST_MEAL_BASE = 110
POST_MEAL_SPREAD = 24


class SugarAdapter(BaseAdapter):
    name = "sugar"
    error_message = "⚠️ Error fetching sugar estimate."

    def __init__(self, gateway: AIGateway, session=None, rng: Optional[random.Random] = None):
        super().__init__(gateway, session)
        self._rng = rng or random.Random()

    def build_request(self, food: str = "", **inputs: Any) -> AIRequest:
        if not food or not food.strip():
            raise ValidationError("Tell me what you ate.")
        return AIRequest(
            prompt_text=(
                f"I ate: {food.strip()}. Estimate post-meal blood sugar impact for a non-diabetic adult, "
                f"add quick mitigation tips."
            )
        )

    def estimate_reading(self) -> int:
        return POST_MEAL_BASE + self._rng.randint(0, POST_MEAL_SPREAD)

    async def map_response(self, response: AIResponse, **inputs: Any) -> Dict[str, Any]:
        reading = self.estimate_reading()
        if self.session is not None:
            self.session.glucose_reading = float(reading)
        return {"glucose_reading": reading, "text": response.text}
