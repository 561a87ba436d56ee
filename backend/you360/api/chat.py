"""
Chat API endpoints - the floating wellness chat.
"""

from typing import List
from fastapi import APIRouter, Depends

from ..core.session import WellnessSession
from ..models import ChatRequest, ChatReply, ConversationMessage
from .deps import get_session

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("/message", response_model=ChatReply)
async def send_message(body: ChatRequest, session: WellnessSession = Depends(get_session)):
    """
    Send a chat message and get the AI reply.

    The whole prior conversation is replayed as context. On failure an error
    message is appended instead of a reply; blank messages change nothing.
    """
    result = await session.adapter("chat").run(message=body.message)
    messages = list(session.conversation.messages)
    reply = messages[-1] if result.display and messages else None
    return ChatReply(
        ok=result.ok,
        reply=reply,
        message=result.message,
        error=result.error,
        conversation=messages,
    )


@router.get("/history", response_model=List[ConversationMessage])
async def get_chat_history(session: WellnessSession = Depends(get_session)):
    """Conversation so far, oldest first."""
    return list(session.conversation.messages)
