"""LLM module - provider abstraction and the AI Gateway used by the adapters."""

from .base import (
    LLMProvider, LLMMessage, LLMResponse, ImagePayload, AIRequest, AIResponse, ResponseKind,
)
from .gemini_provider import GeminiProvider
from .factory import create_llm_provider
from .gateway import AIGateway

__all__ = [
    'LLMProvider',
    'LLMMessage',
    'LLMResponse',
    'ImagePayload',
    'AIRequest',
    'AIResponse',
    'ResponseKind',
    'GeminiProvider',
    'create_llm_provider',
    'AIGateway',
]
