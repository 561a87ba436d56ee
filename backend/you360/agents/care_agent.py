"""
Care Adapters - hair and skin care advice.
"""

from typing import Any, Union

from .base_agent import BaseAdapter
from ..core.exceptions import ValidationError
from ..llm.base import AIRequest
from ..models.wellness import SkinType


class HairAdapter(BaseAdapter):
    """Short hair routine, two diet tips and a home remedy for a described issue."""

    name = "hair"
    error_message = "⚠️ Error fetching hair tips."

    def build_request(self, issue: str = "", **inputs: Any) -> AIRequest:
        if not issue or not issue.strip():
            raise ValidationError("Please describe your hair issue clearly (e.g. dry, hairfall, thin, oily).")
        return AIRequest(
            prompt_text=(
                f"User says: {issue.strip()}. Provide a concise hair care routine (3 steps), "
                f"two dietary recommendations, and one quick home remedy. Keep it short, "
                f"do not ask follow-up questions."
            )
        )


class SkinAdapter(BaseAdapter):
    """Minimal AM/PM routine for a skin type."""

    name = "skin"
    error_message = "⚠️ Error fetching skin routine."

    def build_request(self, skin_type: Union[SkinType, str] = SkinType.OILY, **inputs: Any) -> AIRequest:
        try:
            skin_type = SkinType(skin_type)
        except ValueError:
            raise ValidationError("Skin type must be dry, oily or combination.")
        return AIRequest(
            prompt_text=(
                f"Skin type is {skin_type.value}. Suggest a minimal AM/PM routine for Indian climate "
                f"with product actives (generic). Keep it concise."
            )
        )
