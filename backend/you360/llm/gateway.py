"""
AI Gateway - the single entry point the feature adapters use to talk to the
generative-AI provider.

A request is the prior conversation replayed turn by turn followed by the new
prompt as the final user turn (with the image, if any). With a response
schema the reply is parsed as JSON; without one it is cleaned plain text.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from .base import LLMProvider, LLMMessage, AIRequest, AIResponse, ImagePayload
from .factory import create_llm_provider
from ..core.exceptions import MissingCredential, MalformedResponse

logger = logging.getLogger(__name__)

# Conversation roles -> provider roles
ROLE_MAP = {"user": "user", "assistant": "model"}

# Emphasis markers the dashboard cannot render
MARKUP_CHARS = "*"


def clean_text(text: str) -> str:
    """Strip emphasis markers and surrounding whitespace."""
    for char in MARKUP_CHARS:
        text = text.replace(char, "")
    return text.strip()


def required_keys(schema: Dict[str, Any]) -> List[str]:
    """Keys a structured reply must carry: ``required`` if declared, else every property."""
    if schema.get("required"):
        return list(schema["required"])
    return list((schema.get("properties") or {}).keys())


def parse_structured(text: str, schema: Dict[str, Any]) -> Dict[str, Any]:
    """
    Parse a JSON reply and check it against the declared schema keys.

    Raises:
        MalformedResponse: Text is not a JSON object or lacks required keys
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise MalformedResponse(f"Reply is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedResponse("Reply is not a JSON object")

    missing = [key for key in required_keys(schema) if key not in data]
    if missing:
        raise MalformedResponse(f"Reply is missing keys: {', '.join(missing)}")
    return data


def _role_of(message: Any) -> str:
    role = message["role"] if isinstance(message, dict) else message.role
    return getattr(role, "value", role)


def _text_of(message: Any) -> str:
    return message["text"] if isinstance(message, dict) else message.text


class AIGateway:
    """
    Normalizes prompts into provider requests and replies into AIResponse.
    Holds no conversation state; callers pass history explicitly.
    """

    def __init__(self, provider: Optional[LLMProvider], max_retries: int = 5,
                 vision_model: Optional[str] = None):
        """
        Args:
            provider: Configured provider, or None when no API key is set
            max_retries: Rate-limit retries for requests that opt in
            vision_model: Model used for requests carrying an image
        """
        self._provider = provider
        self.max_retries = max_retries
        self.vision_model = vision_model

    @classmethod
    def from_settings(cls, config: Any) -> "AIGateway":
        provider = create_llm_provider(
            provider=config.llm_provider,
            api_key=config.gemini_api_key,
            model=config.gemini_model,
            base_url=config.gemini_base_url,
            timeout=config.llm_timeout,
            retry_initial_delay=config.llm_retry_initial_delay,
        )
        return cls(provider, max_retries=config.llm_max_retries,
                   vision_model=config.gemini_vision_model)

    @property
    def configured(self) -> bool:
        return self._provider is not None

    def build_messages(self, request: AIRequest) -> List[LLMMessage]:
        """History first, then the prompt (and image) as the final user turn."""
        messages = [
            LLMMessage.text(ROLE_MAP.get(_role_of(m), "user"), _text_of(m))
            for m in request.history
        ]
        messages.append(LLMMessage.multimodal("user", request.prompt_text, request.image))
        return messages

    async def ask(
        self,
        prompt_text: str,
        history: Sequence[Any] = (),
        image: Optional[ImagePayload] = None,
        response_schema: Optional[Dict[str, Any]] = None,
        retry_rate_limited: bool = False,
    ) -> AIResponse:
        """
        Send one prompt to the provider.

        Args:
            prompt_text: New user turn
            history: Prior ConversationMessage items (or dicts with role/text)
            image: Optional image attached to the final turn
            response_schema: Schema for a JSON-constrained reply
            retry_rate_limited: Retry HTTP 429 answers with backoff

        Returns:
            AIResponse of kind plain_text or structured_json

        Raises:
            MissingCredential, RateLimited, ProviderError, MalformedResponse, EmptyResponse
        """
        if self._provider is None:
            raise MissingCredential()

        request = AIRequest(prompt_text=prompt_text, history=history, image=image,
                            response_schema=response_schema)
        has_image = image is not None and not image.is_empty
        response = await self._provider.generate_content(
            self.build_messages(request),
            response_schema=response_schema,
            max_retries=self.max_retries if retry_rate_limited else 0,
            model=self.vision_model if has_image else None,
        )

        if response_schema is not None:
            return AIResponse.structured(parse_structured(response.content, response_schema))
        return AIResponse.plain(clean_text(response.content))
