"""
LLM Provider Base - Abstract base for generative-AI providers.
Messages are role-tagged turns made of text and inline image parts.
"""

import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, Optional, List, Sequence


@dataclass
class ImagePayload:
    """Binary image attached to a turn."""
    mime_type: str
    data: bytes

    @property
    def is_empty(self) -> bool:
        return not self.data

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("utf-8")


@dataclass
class LLMMessage:
    """
    One turn of a conversation sent to the provider.
    Roles are "user" and "model" (the provider's name for the assistant).
    """
    role: str
    parts: List[Dict[str, Any]]

    @staticmethod
    def text(role: str, text: str) -> "LLMMessage":
        """Create a text-only turn."""
        return LLMMessage(role=role, parts=[{"text": text}])

    @staticmethod
    def multimodal(role: str, text: str, image: Optional[ImagePayload] = None) -> "LLMMessage":
        """
        Create a turn carrying text and, optionally, one inline image.

        Args:
            role: Turn role
            text: Text content
            image: Image sent inline as base64 next to the text
        """
        parts: List[Dict[str, Any]] = [{"text": text}]
        if image is not None and not image.is_empty:
            parts.append({
                "inlineData": {
                    "mimeType": image.mime_type,
                    "data": image.to_base64(),
                }
            })
        return LLMMessage(role=role, parts=parts)


@dataclass
class LLMResponse:
    """Text of the first candidate plus envelope metadata."""
    content: str
    model: str = ""
    usage: Dict[str, int] = field(default_factory=dict)
    raw: Optional[Dict[str, Any]] = None


@dataclass
class AIRequest:
    """What an adapter asks the gateway for."""
    prompt_text: str
    history: Sequence[Any] = ()
    image: Optional[ImagePayload] = None
    response_schema: Optional[Dict[str, Any]] = None


class ResponseKind(str, Enum):
    PLAIN_TEXT = "plain_text"
    STRUCTURED_JSON = "structured_json"
    ERROR = "error"


@dataclass
class AIResponse:
    """Gateway answer: plain text, parsed JSON fields, or the error that occurred."""
    kind: ResponseKind
    text: str = ""
    fields: Dict[str, Any] = field(default_factory=dict)
    error: Optional[Exception] = None

    @classmethod
    def plain(cls, text: str) -> "AIResponse":
        return cls(kind=ResponseKind.PLAIN_TEXT, text=text)

    @classmethod
    def structured(cls, fields: Dict[str, Any]) -> "AIResponse":
        return cls(kind=ResponseKind.STRUCTURED_JSON, fields=fields)

    @classmethod
    def failure(cls, error: Exception) -> "AIResponse":
        return cls(kind=ResponseKind.ERROR, error=error)


class LLMProvider(ABC):
    """
    Abstract base class for LLM API providers.
    Providers raise the errors from ``core.exceptions``; they never return partial results.
    """

    def __init__(self, api_key: str, model: str, base_url: Optional[str] = None,
                 default_temperature: float = 0.7, default_max_tokens: int = 2048):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.default_temperature = default_temperature
        self.default_max_tokens = default_max_tokens

    @abstractmethod
    async def generate_content(
        self,
        messages: List[LLMMessage],
        response_schema: Optional[Dict[str, Any]] = None,
        max_retries: int = 0,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> LLMResponse:
        """
        Send one generation request.

        Args:
            messages: Conversation turns, last one is the new user turn
            response_schema: When set, the reply must be JSON matching it
            max_retries: How many times a rate-limited request is retried
            model: Model override
            temperature: Sampling temperature override

        Returns:
            LLMResponse with the first candidate's text
        """
        pass

    def _format_messages(self, messages: List[LLMMessage]) -> List[Dict[str, Any]]:
        """Convert LLMMessage list to API-compatible format."""
        return [{"role": m.role, "parts": m.parts} for m in messages]
