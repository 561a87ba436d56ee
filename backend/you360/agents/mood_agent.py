"""
Mood Adapter - one-line supportive tip for the selected mood emoji.
"""

from typing import Any, Dict

from .base_agent import BaseAdapter
from ..core.exceptions import ValidationError
from ..llm.base import AIRequest, AIResponse

MOOD_EMOJIS = ["😀", "😊", "😐", "😔", "😡", "🥳", "😭", "😴", "🤒", "🤩", "😅", "😎", "😤", "😢", "🤯"]


class MoodAdapter(BaseAdapter):
    name = "mood"
    error_message = "⚠️ Error fetching mood tip."

    def build_request(self, emoji: str = "", **inputs: Any) -> AIRequest:
        if not emoji or not emoji.strip():
            raise ValidationError("Pick an emoji that matches your mood.")
        if self.session is not None:
            self.session.mood = emoji
        return AIRequest(
            prompt_text=f"User selected mood {emoji}. Provide a one-line supportive wellness tip (max 20 words)."
        )

    async def map_response(self, response: AIResponse, emoji: str = "", **inputs: Any) -> Dict[str, Any]:
        return {"mood": emoji, "text": response.text}
