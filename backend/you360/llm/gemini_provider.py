"""
Google Gemini LLM Provider.
Talks to the ``generateContent`` REST endpoint. HTTP 429 answers are retried
with exponential backoff; every other failure is raised immediately.
"""

import asyncio
import httpx
import logging
import time
from typing import Optional, List, Dict, Any, Awaitable, Callable

from .base import LLMProvider, LLMMessage, LLMResponse
from ..core.exceptions import RateLimited, ProviderError, EmptyResponse
from ..core.logging_config import redact_api_key

logger = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    """Provider for the Gemini API (text and inline-image understanding)."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-1.5-flash-latest",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        default_temperature: float = 0.7,
        default_max_tokens: int = 2048,
        timeout: float = 60.0,
        retry_initial_delay: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        super().__init__(api_key, model, base_url, default_temperature, default_max_tokens)
        self.timeout = timeout
        self.retry_initial_delay = retry_initial_delay
        self._sleep = sleep

    def _get_headers(self) -> Dict[str, str]:
        return {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

    def _build_payload(
        self,
        messages: List[LLMMessage],
        response_schema: Optional[Dict[str, Any]],
        temperature: Optional[float],
    ) -> Dict[str, Any]:
        generation_config: Dict[str, Any] = {
            "temperature": temperature if temperature is not None else self.default_temperature,
            "maxOutputTokens": self.default_max_tokens,
        }
        if response_schema is not None:
            generation_config["responseMimeType"] = "application/json"
            generation_config["responseSchema"] = response_schema
        return {
            "contents": self._format_messages(messages),
            "generationConfig": generation_config,
        }

    def retry_delay(self, retry_count: int) -> float:
        """Backoff before retry number ``retry_count`` (0-based)."""
        return self.retry_initial_delay * (2 ** retry_count)

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        try:
            data = resp.json()
            message = (data.get("error") or {}).get("message")
            if message:
                return message
        except (ValueError, AttributeError):
            pass
        return f"API error: {resp.status_code}"

    async def generate_content(
        self,
        messages: List[LLMMessage],
        response_schema: Optional[Dict[str, Any]] = None,
        max_retries: int = 0,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> LLMResponse:
        """Send request to the generateContent endpoint."""
        start_time = time.time()
        model_name = model or self.model
        url = f"{self.base_url}/models/{model_name}:generateContent"
        payload = self._build_payload(messages, response_schema, temperature)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"LLM API call starting: provider=gemini, model={model_name}, "
                f"{len(messages)} turns, structured={response_schema is not None}"
            )

        retries = 0
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                while True:
                    resp = await client.post(url, json=payload, headers=self._get_headers())

                    if resp.status_code == 429:
                        if retries < max_retries:
                            delay = self.retry_delay(retries)
                            retries += 1
                            logger.warning(
                                f"LLM API rate limited, retry {retries}/{max_retries} in {delay:.1f}s",
                                extra={"extra_fields": {"provider": "gemini", "model": model_name}}
                            )
                            await self._sleep(delay)
                            continue
                        raise RateLimited(
                            f"Rate limited by provider after {retries + 1} attempt(s)",
                            attempts=retries + 1,
                        )

                    if not 200 <= resp.status_code < 300:
                        raise ProviderError(self._error_message(resp), status_code=resp.status_code)

                    data = resp.json()
                    break
        except httpx.HTTPError as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"LLM API call failed: {redact_api_key(str(e))}",
                extra={"extra_fields": {
                    "provider": "gemini",
                    "model": model_name,
                    "duration_ms": round(duration_ms, 2),
                }}
            )
            raise ProviderError(f"Network error: {redact_api_key(str(e))}") from e
        except (RateLimited, ProviderError) as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"LLM API call failed: {e.message}",
                extra={"extra_fields": {
                    "provider": "gemini",
                    "model": model_name,
                    "duration_ms": round(duration_ms, 2),
                    "retries": retries,
                    "error": e.message,
                }}
            )
            raise

        usage = data.get("usageMetadata", {})
        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "LLM API call completed",
            extra={"extra_fields": {
                "provider": "gemini",
                "model": data.get("modelVersion", model_name),
                "prompt_tokens": usage.get("promptTokenCount", 0),
                "completion_tokens": usage.get("candidatesTokenCount", 0),
                "total_tokens": usage.get("totalTokenCount", 0),
                "duration_ms": round(duration_ms, 2),
                "retries": retries,
            }}
        )

        candidates = data.get("candidates") or []
        if not candidates:
            raise EmptyResponse("Provider returned no candidates")

        parts = (candidates[0].get("content") or {}).get("parts") or []
        texts = [part["text"] for part in parts if part.get("text")]
        if not texts:
            raise EmptyResponse("First candidate has no text")

        return LLMResponse(
            content=texts[0],
            model=data.get("modelVersion", model_name),
            usage=usage,
            raw=data,
        )
