"""
Exercise Adapter - three-day home or gym plan.
"""

from typing import Any, Union

from .base_agent import BaseAdapter
from ..core.exceptions import ValidationError
from ..llm.base import AIRequest
from ..models.wellness import ExerciseMode

PLAN_PROMPTS = {
    ExerciseMode.HOME: "Create a 3-day home bodyweight plan.",
    ExerciseMode.GYM: "Create a 3-day gym push/pull/legs plan.",
}


class ExerciseAdapter(BaseAdapter):
    name = "exercise"
    error_message = "⚠️ Error fetching plan."

    def build_request(self, mode: Union[ExerciseMode, str] = ExerciseMode.HOME, **inputs: Any) -> AIRequest:
        try:
            mode = ExerciseMode(mode)
        except ValueError:
            raise ValidationError("Mode must be home or gym.")
        return AIRequest(prompt_text=f"{PLAN_PROMPTS[mode]} Include sets/reps and warm-up. Keep concise.")
