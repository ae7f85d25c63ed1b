import time
from collections import OrderedDict
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Tuple

from curio.config import settings as config
from curio.dialogue.state import ConversationState


class SessionStore:
    """
    In-memory ConversationState store keyed by session id.

    Entries idle for longer than ``ttl_seconds`` are evicted, and once more
    than ``max_sessions`` are held the least recently used one is dropped.
    Not safe for concurrent mutation of the same session id; callers
    serialize turns per session.
    """

    def __init__(
        self,
        ttl_seconds: Optional[int] = None,
        max_sessions: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else config.SESSION_TTL_SECONDS
        self.max_sessions = max_sessions if max_sessions is not None else config.MAX_SESSIONS
        self._clock = clock
        self._sessions: "OrderedDict[str, Tuple[ConversationState, float]]" = OrderedDict()
        self.created_at = datetime.now()

    def _evict_expired(self, now: float) -> None:
        expired = [
            session_id for session_id, (_, last_seen) in self._sessions.items()
            if now - last_seen > self.ttl_seconds
        ]
        for session_id in expired:
            del self._sessions[session_id]

    def get(self, session_id: str) -> ConversationState:
        """Return the session's state, creating a fresh one on first use."""
        now = self._clock()
        self._evict_expired(now)
        entry = self._sessions.get(session_id)
        state = entry[0] if entry else ConversationState()
        self._touch(session_id, state, now)
        return state

    def set(self, session_id: str, state: ConversationState) -> None:
        self._touch(session_id, state, self._clock())

    def _touch(self, session_id: str, state: ConversationState, now: float) -> None:
        self._sessions[session_id] = (state, now)
        self._sessions.move_to_end(session_id)
        while len(self._sessions) > self.max_sessions:
            self._sessions.popitem(last=False)

    def reset(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def has(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def get_stats(self) -> Dict[str, Any]:
        """Get store statistics."""
        steps: Dict[str, int] = {}
        for state, _ in self._sessions.values():
            steps[state.step.value] = steps.get(state.step.value, 0) + 1
        return {
            "created_at": self.created_at.isoformat(),
            "session_count": len(self._sessions),
            "steps": steps,
        }
