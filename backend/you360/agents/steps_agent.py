"""
Steps Adapter - converts a walked distance to steps and ratchets today's total.
"""

import math
from typing import Any, Dict, Union

from .base_agent import BaseAdapter
from ..core.exceptions import ValidationError
from ..llm.base import AIRequest, AIResponse
from ..models.wellness import DistanceUnit

STRIDE_METERS = 0.78


def distance_to_steps(value: float, unit: Union[DistanceUnit, str] = DistanceUnit.KM) -> int:
    """Steps for a distance, assuming a 0.78 m stride. Never negative."""
    try:
        unit = DistanceUnit(unit)
    except ValueError:
        raise ValidationError(f"Unknown distance unit: {unit}")
    meters = value * 1000 if unit is DistanceUnit.KM else value
    steps = meters / STRIDE_METERS
    if not math.isfinite(steps):
        raise ValidationError("Distance must be a finite number.")
    # floor(x + 0.5): half-up like the dashboard
    return max(0, int(steps + 0.5))


def ratchet_steps(previous: int, computed: int) -> int:
    """Today's total only moves up."""
    return max(previous, computed)


class StepsAdapter(BaseAdapter):
    name = "steps"
    error_message = "⚠️ Error fetching step summary."

    def build_request(self, distance: float = 0, unit: Union[DistanceUnit, str] = DistanceUnit.KM,
                      **inputs: Any) -> AIRequest:
        distance = float(distance or 0)
        if distance < 0:
            raise ValidationError("Distance cannot be negative.")
        steps = distance_to_steps(distance, unit)
        unit_label = DistanceUnit(unit).value
        if self.session is not None:
            self.session.record_steps(steps)
        return AIRequest(
            prompt_text=(
                f"I walked {distance:g} {unit_label}. Convert to steps (assume 0.78m per step) "
                f"then give one motivational line."
            )
        )

    async def map_response(self, response: AIResponse, distance: float = 0,
                           unit: Union[DistanceUnit, str] = DistanceUnit.KM, **inputs: Any) -> Dict[str, Any]:
        display = {
            "steps": distance_to_steps(float(distance or 0), unit),
            "text": response.text,
        }
        if self.session is not None:
            display["steps_today"] = self.session.steps_today
        return display

    async def on_failure(self, error: Exception, distance: float = 0,
                         unit: Union[DistanceUnit, str] = DistanceUnit.KM, **inputs: Any) -> Dict[str, Any]:
        # The conversion is local, so it is still shown when only the AI line failed
        if isinstance(error, ValidationError):
            return {}
        display = {"steps": distance_to_steps(float(distance or 0), unit)}
        if self.session is not None:
            display["steps_today"] = self.session.steps_today
        return display
