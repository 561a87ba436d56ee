"""
Error taxonomy shared by the gateway, the feature adapters and the API.
"""

from typing import Optional


class WellnessError(Exception):
    """Base class for every error the wellness core raises on purpose."""

    #: Text shown to the user when the error reaches a display slot.
    user_message = "Something went wrong. Please try again."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.user_message)
        self.message = message or self.user_message


class ValidationError(WellnessError):
    """Bad or missing user input, detected before any network call."""

    user_message = "Please check your input."


class MissingCredential(WellnessError):
    """No API key configured for the AI provider."""

    user_message = "AI features are not configured. Set GEMINI_API_KEY to enable them."


class RateLimited(WellnessError):
    """The provider kept answering HTTP 429 after all retries."""

    user_message = "The AI service is busy right now. Please try again in a moment."

    def __init__(self, message: Optional[str] = None, attempts: int = 1):
        super().__init__(message)
        self.attempts = attempts


class ProviderError(WellnessError):
    """Non-success answer from the provider (anything but 429)."""

    user_message = "The AI service returned an error."

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponse(WellnessError):
    """Reply text did not parse as JSON or lacks declared keys."""

    user_message = "The AI reply could not be understood. Please try again."


class EmptyResponse(WellnessError):
    """The provider returned no candidates."""

    user_message = "The AI service returned no answer."


class AdapterBusy(WellnessError):
    """A request is already in flight for this adapter instance."""

    user_message = "Still working on your previous request."
