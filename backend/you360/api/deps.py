"""
Shared API dependencies - session lookup.
"""

from typing import Optional
from fastapi import Depends, Header

from ..config import settings
from ..core.session import SessionStore, WellnessSession
from ..llm.gateway import AIGateway
from ..storage import LocalStorage
from ..utils.auth import get_optional_user_id

_session_store: Optional[SessionStore] = None


def init_session_store(store: Optional[SessionStore] = None) -> SessionStore:
    """Install the process-wide session store, building one from settings if needed."""
    global _session_store
    if store is None:
        store = SessionStore(
            AIGateway.from_settings(settings),
            LocalStorage(settings.local_storage_path),
            max_sessions=settings.session_max_count,
            idle_ttl=settings.session_idle_ttl,
        )
    _session_store = store
    return _session_store


def get_session_store() -> SessionStore:
    if _session_store is None:
        return init_session_store()
    return _session_store


async def get_session(
    x_session_id: str = Header("default", description="Dashboard session identifier"),
    user_id: Optional[str] = Depends(get_optional_user_id),
    store: SessionStore = Depends(get_session_store),
) -> WellnessSession:
    """Session named by the X-Session-ID header, created on first use."""
    return store.get_or_create(x_session_id, owner_id=user_id or "guest")
