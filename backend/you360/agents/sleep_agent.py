"""
Sleep Adapter - deep/light split plus a short AI sleep analysis.
"""

import math
from typing import Any, Dict, Tuple

from .base_agent import BaseAdapter
from ..core.exceptions import ValidationError
from ..llm.base import AIRequest, AIResponse

DEEP_SLEEP_SHARE = 0.22


def _round1(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


def split_sleep(hours: float) -> Tuple[float, float]:
    """Estimated (deep, light) hours, one decimal each."""
    deep = _round1(hours * DEEP_SLEEP_SHARE)
    light = max(0.0, _round1(hours - deep))
    return deep, light


class SleepAdapter(BaseAdapter):
    name = "sleep"
    error_message = "⚠️ Error fetching sleep analysis."

    def build_request(self, hours: float = 0, **inputs: Any) -> AIRequest:
        hours = float(hours or 0)
        if not math.isfinite(hours):
            raise ValidationError("Sleep hours must be a finite number.")
        if hours < 0:
            raise ValidationError("Sleep hours cannot be negative.")
        if self.session is not None:
            self.session.sleep_hours = hours
        return AIRequest(
            prompt_text=(
                f"I slept {hours:g} hours. Give a concise sleep analysis with 2 tips "
                f"and whether it's below or above 8 hours."
            )
        )

    async def map_response(self, response: AIResponse, hours: float = 0, **inputs: Any) -> Dict[str, Any]:
        deep, light = split_sleep(float(hours or 0))
        return {
            "hours": float(hours or 0),
            "deep_hours": deep,
            "light_hours": light,
            "text": response.text,
        }

    def success_message(self, display: Dict[str, Any]) -> str:
        return f"Deep: {display['deep_hours']}h\nLight: {display['light_hours']}h\n\n{display['text']}"
