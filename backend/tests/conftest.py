"""
Shared test fixtures and configuration.
"""

import pytest
import os
import tempfile

# Set test environment variables before importing app modules
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("LOCAL_STORAGE_PATH", os.path.join(tempfile.gettempdir(), "you360_test_data"))
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ["GEMINI_API_KEY"] = ""

from you360.llm.base import LLMProvider, LLMResponse  # noqa: E402
from you360.llm.gateway import AIGateway  # noqa: E402


class FakeProvider(LLMProvider):
    """
    Provider double: answers from a script and records every call.
    Script items are reply strings or exceptions to raise.
    """

    def __init__(self, replies=None):
        super().__init__(api_key="test-key", model="fake-model")
        self.replies = list(replies or [])
        self.calls = []

    async def generate_content(self, messages, response_schema=None, max_retries=0,
                               model=None, temperature=None):
        self.calls.append({
            "messages": messages,
            "response_schema": response_schema,
            "max_retries": max_retries,
            "model": model,
        })
        reply = self.replies.pop(0) if self.replies else "ok"
        if isinstance(reply, Exception):
            raise reply
        return LLMResponse(content=reply, model="fake-model")


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def gateway(fake_provider):
    return AIGateway(fake_provider, max_retries=5, vision_model="fake-vision")
