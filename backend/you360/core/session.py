"""
Session state - everything one dashboard session owns.

Sessions are explicit objects handed to the adapters, so two browser tabs or
two users never share a conversation or step count.
"""

import logging
import time
import uuid
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from .meditation import MeditationTimer
from .routines import RoutineTracker
from .wellness import compute_score
from ..agents import ADAPTER_CLASSES, BaseAdapter
from ..llm.gateway import AIGateway
from ..models.session import ConversationMessage, MessageRole
from ..models.wellness import WellnessSample
from ..storage.interface import StorageInterface
from ..storage.recipe_storage import LastRecipeStore

logger = logging.getLogger(__name__)

DEFAULT_MOOD = "😊"
DEFAULT_SLEEP_HOURS = 7.5
DEFAULT_GLUCOSE_READING = 105.0

# (owner_id, session_id)
SessionKey = Tuple[str, str]


class Conversation:
    """Append-only sequence of chat turns."""

    def __init__(self):
        self._messages: List[ConversationMessage] = []

    @property
    def messages(self) -> Tuple[ConversationMessage, ...]:
        return tuple(self._messages)

    def append(self, role: MessageRole, text: str) -> ConversationMessage:
        message = ConversationMessage(role=role, text=text)
        self._messages.append(message)
        return message

    def __len__(self) -> int:
        return len(self._messages)


class WellnessSession:
    """Dashboard state plus one adapter instance per feature card."""

    def __init__(
        self,
        gateway: AIGateway,
        session_id: Optional[str] = None,
        recipe_store: Optional[LastRecipeStore] = None,
        routines: Optional[RoutineTracker] = None,
        meditation: Optional[MeditationTimer] = None,
    ):
        self.session_id = session_id or str(uuid.uuid4())
        self.created_at = datetime.now(timezone.utc)
        self.gateway = gateway
        self.recipe_store = recipe_store

        self.mood = DEFAULT_MOOD
        self.sleep_hours = DEFAULT_SLEEP_HOURS
        self.steps_today = 0
        self.glucose_reading = DEFAULT_GLUCOSE_READING

        self.conversation = Conversation()
        self.routines = routines if routines is not None else RoutineTracker.with_defaults()
        self.meditation = meditation if meditation is not None else MeditationTimer()
        self.adapters: Dict[str, BaseAdapter] = {
            name: adapter_cls(gateway, self) for name, adapter_cls in ADAPTER_CLASSES.items()
        }

    def adapter(self, name: str) -> BaseAdapter:
        return self.adapters[name]

    def record_steps(self, steps: int) -> int:
        """Ratchet today's steps; a smaller reading never lowers the total."""
        self.steps_today = max(self.steps_today, steps)
        return self.steps_today

    def sample(self) -> WellnessSample:
        return WellnessSample(
            sleep_hours=self.sleep_hours,
            steps_today=self.steps_today,
            glucose_reading=self.glucose_reading,
        )

    def score(self) -> int:
        return compute_score(self.sample())


class SessionStore:
    """
    In-process registry of live sessions, keyed by ``(owner_id, session_id)``.

    The same session id under two owners names two sessions, so callers only
    ever reach their own state. Sessions idle for longer than ``idle_ttl``
    seconds are dropped, and past ``max_sessions`` the least recently used one
    is evicted. Each session gets a last-recipe store in the owner's
    namespace, so the last recipe outlives the session that produced it.
    """

    def __init__(
        self,
        gateway: AIGateway,
        storage: Optional[StorageInterface] = None,
        max_sessions: int = 1000,
        idle_ttl: float = 12 * 60 * 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.gateway = gateway
        self.storage = storage
        self.max_sessions = max_sessions
        self.idle_ttl = idle_ttl
        self._clock = clock
        # key: (session, last access)
        self._sessions: "OrderedDict[SessionKey, Tuple[WellnessSession, float]]" = OrderedDict()

    def _create(self, key: SessionKey) -> WellnessSession:
        owner_id, session_id = key
        recipe_store = LastRecipeStore(self.storage, owner_id) if self.storage is not None else None
        session = WellnessSession(self.gateway, session_id=session_id, recipe_store=recipe_store)
        self._sessions[key] = (session, self._clock())
        self._evict()
        logger.info(f"Session created: {session_id}", extra={"extra_fields": {"owner": owner_id}})
        return session

    def _expire(self) -> None:
        now = self._clock()
        expired = [key for key, (_, seen) in self._sessions.items() if now - seen > self.idle_ttl]
        for key in expired:
            del self._sessions[key]
        if expired:
            logger.info(f"Expired {len(expired)} idle session(s)")

    def _evict(self) -> None:
        while len(self._sessions) > self.max_sessions:
            (owner_id, session_id), _ = self._sessions.popitem(last=False)
            logger.info(f"Session evicted: {session_id}", extra={"extra_fields": {"owner": owner_id}})

    def get_or_create(self, session_id: str, owner_id: str = "guest") -> WellnessSession:
        self._expire()
        key = (owner_id, session_id)
        entry = self._sessions.get(key)
        if entry is None:
            return self._create(key)
        self._sessions[key] = (entry[0], self._clock())
        self._sessions.move_to_end(key)
        return entry[0]

    def reset(self, session_id: str, owner_id: str = "guest") -> WellnessSession:
        """Start over, like reloading the page."""
        key = (owner_id, session_id)
        self._sessions.pop(key, None)
        return self._create(key)

    def __contains__(self, key: SessionKey) -> bool:
        return key in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
