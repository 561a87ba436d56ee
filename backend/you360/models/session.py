"""
Session Models - chat conversation and per-session dashboard state.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field


class MessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ConversationMessage(BaseModel):
    """One chat turn. Order within a conversation is meaningful."""
    role: MessageRole
    text: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ChatRequest(BaseModel):
    message: str


class ChatReply(BaseModel):
    ok: bool
    reply: Optional[ConversationMessage] = None
    message: Optional[str] = None
    error: Optional[str] = None
    conversation: List[ConversationMessage]


class SessionSummary(BaseModel):
    """Summary pills of the dashboard."""
    session_id: str
    mood: str
    sleep_hours: float
    steps_today: int
    glucose_reading: float
    wellness_score: int
    message_count: int
    created_at: datetime
