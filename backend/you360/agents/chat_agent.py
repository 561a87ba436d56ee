"""
Chat Adapter - free-form wellness chat over the session conversation.

The conversation is append-only: the user's turn is added before the call,
then either the reply or an error sentinel is added after it.
"""

from typing import Any, Dict

from .base_agent import BaseAdapter
from ..core.exceptions import ValidationError
from ..llm.base import AIRequest, AIResponse
from ..models.session import MessageRole

CHAT_ERROR_SENTINEL = "⚠️ Error talking to AI"


class ChatAdapter(BaseAdapter):
    name = "chat"
    error_message = CHAT_ERROR_SENTINEL

    def build_request(self, message: str = "", **inputs: Any) -> AIRequest:
        if not message or not message.strip():
            raise ValidationError("Type a message first.")
        conversation = self.session.conversation
        history = list(conversation.messages)
        conversation.append(MessageRole.USER, message)
        return AIRequest(prompt_text=message, history=history)

    async def map_response(self, response: AIResponse, **inputs: Any) -> Dict[str, Any]:
        reply = self.session.conversation.append(MessageRole.ASSISTANT, response.text)
        return {"text": reply.text}

    async def on_failure(self, error: Exception, **inputs: Any) -> Dict[str, Any]:
        if isinstance(error, ValidationError):
            return {}
        reply = self.session.conversation.append(MessageRole.ASSISTANT, CHAT_ERROR_SENTINEL)
        return {"text": reply.text}
