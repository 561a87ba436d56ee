"""
Base Adapter - the shared "build prompt -> call gateway -> map reply" flow
behind every dashboard card.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional, TYPE_CHECKING

from ..core.exceptions import (
    WellnessError, ValidationError, MissingCredential, ProviderError, RateLimited, AdapterBusy,
)
from ..llm.base import AIRequest, AIResponse
from ..llm.gateway import AIGateway
from ..models.wellness import AdapterResult

if TYPE_CHECKING:
    from ..core.session import WellnessSession

logger = logging.getLogger(__name__)


class AdapterState(str, Enum):
    IDLE = "idle"
    REQUESTING = "requesting"


class BaseAdapter(ABC):
    """
    Abstract base class for feature adapters.

    Subclasses supply the prompt builder (``build_request``) and the reply
    mapper (``map_response``); ``run`` is the one generic operation that
    drives them. Each instance allows a single request in flight: a call to
    ``run`` while another is pending is rejected with AdapterBusy.
    """

    #: Adapter name used in results and logs
    name: str = "base"
    #: Retry HTTP 429 answers with exponential backoff
    retry_rate_limited: bool = False
    #: Message shown when the request fails for a reason the user cannot fix
    error_message: str = "⚠️ Error fetching AI response."

    def __init__(self, gateway: AIGateway, session: Optional["WellnessSession"] = None):
        """
        Args:
            gateway: AI Gateway shared by the session's adapters
            session: Session state the adapter reads and updates
        """
        self.gateway = gateway
        self.session = session
        self.state = AdapterState.IDLE

    @property
    def busy(self) -> bool:
        return self.state is AdapterState.REQUESTING

    @abstractmethod
    def build_request(self, **inputs: Any) -> AIRequest:
        """Validate inputs and build the gateway request. Raises ValidationError."""

    async def map_response(self, response: AIResponse, **inputs: Any) -> Dict[str, Any]:
        """Turn the gateway reply into display fields."""
        return {"text": response.text}

    def success_message(self, display: Dict[str, Any]) -> Optional[str]:
        return display.get("text")

    def failure_message(self, error: Exception) -> str:
        if isinstance(error, ValidationError):
            return error.message
        if isinstance(error, (MissingCredential, RateLimited, AdapterBusy)):
            return error.user_message
        return self.error_message

    async def on_failure(self, error: Exception, **inputs: Any) -> Dict[str, Any]:
        """Hook for adapters that record failures in session state."""
        return {}

    async def run(self, **inputs: Any) -> AdapterResult:
        """
        Execute one request for this card.

        Errors never propagate: they come back as a failed AdapterResult
        carrying the error kind and a message to display.
        """
        if self.busy:
            logger.warning(f"Adapter {self.name} rejected a request while busy")
            return self._failure(AdapterBusy(), {})

        self.state = AdapterState.REQUESTING
        try:
            request = self.build_request(**inputs)
            response = await self.gateway.ask(
                request.prompt_text,
                history=request.history,
                image=request.image,
                response_schema=request.response_schema,
                retry_rate_limited=self.retry_rate_limited,
            )
            display = await self.map_response(response, **inputs)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(f"Adapter {self.name} completed: fields={sorted(display)}")
            return AdapterResult(
                ok=True,
                adapter=self.name,
                display=display,
                message=self.success_message(display),
            )
        except WellnessError as e:
            if isinstance(e, (MissingCredential, ProviderError)):
                logger.error(
                    f"Adapter {self.name} failed: {e.message}",
                    extra={"extra_fields": {"adapter": self.name, "error": e.__class__.__name__}}
                )
            else:
                logger.warning(f"Adapter {self.name} failed: {e.__class__.__name__}: {e.message}")
            return self._failure(e, await self._failure_display(e, inputs))
        except Exception as e:
            logger.error(
                f"Adapter {self.name} crashed: {str(e)}",
                exc_info=True,
                extra={"extra_fields": {"adapter": self.name, "error": str(e)}}
            )
            return self._failure(e, await self._failure_display(e, inputs))
        finally:
            self.state = AdapterState.IDLE

    async def _failure_display(self, error: Exception, inputs: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return await self.on_failure(error, **inputs)
        except Exception as hook_error:
            logger.error(
                f"Adapter {self.name} failure hook crashed: {str(hook_error)}",
                exc_info=True,
                extra={"extra_fields": {"adapter": self.name, "error": str(hook_error)}}
            )
            return {}

    def _failure(self, error: Exception, display: Dict[str, Any]) -> AdapterResult:
        return AdapterResult(
            ok=False,
            adapter=self.name,
            display=display,
            message=self.failure_message(error),
            error=error.__class__.__name__,
        )
