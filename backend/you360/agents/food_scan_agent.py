"""
Food Scan Adapter - identifies food in a photo and estimates its nutrition.
Uses a JSON-constrained reply and retries rate-limited requests.
"""

from typing import Any, Dict, Optional

import pydantic

from .base_agent import BaseAdapter
from ..core.exceptions import ValidationError, MalformedResponse
from ..llm.base import AIRequest, AIResponse, ImagePayload
from ..models.food import FoodScanResult

SUPPORTED_IMAGE_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/webp", "image/gif"}

FOOD_SCAN_PROMPT = (
    "What is this food and what is its nutritional value? Please provide estimated values for "
    "calories, carbs, protein, and fat. Also, state whether it is a healthy food or junk food, "
    "and give some additional health tips."
)

FOOD_SCAN_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "foodName": {"type": "STRING"},
        "calories": {"type": "STRING"},
        "carbs": {"type": "STRING"},
        "protein": {"type": "STRING"},
        "fats": {"type": "STRING"},
        "healthRating": {"type": "STRING", "enum": ["Healthy", "Junk Food"]},
        "tips": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": ["foodName", "calories", "carbs", "protein", "fats", "healthRating", "tips"],
}


class FoodScanAdapter(BaseAdapter):
    name = "food_scan"
    retry_rate_limited = True
    error_message = "Failed to analyze the image. Please try again."

    def build_request(self, image: Optional[ImagePayload] = None, **inputs: Any) -> AIRequest:
        if image is None or image.is_empty:
            raise ValidationError("no image selected")
        if image.mime_type not in SUPPORTED_IMAGE_TYPES:
            raise ValidationError(f"Unsupported image type: {image.mime_type}")
        return AIRequest(
            prompt_text=FOOD_SCAN_PROMPT,
            image=image,
            response_schema=FOOD_SCAN_SCHEMA,
        )

    async def map_response(self, response: AIResponse, **inputs: Any) -> Dict[str, Any]:
        try:
            result = FoodScanResult(**response.fields)
        except pydantic.ValidationError as e:
            raise MalformedResponse(f"Scan reply does not match the expected fields: {e.error_count()} error(s)") from e
        return result.model_dump(mode="json")

    def success_message(self, display: Dict[str, Any]) -> str:
        return f"{display['foodName']} ({display['healthRating']})"
