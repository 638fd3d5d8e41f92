"""
In-memory conversation store.

Sessions live for the lifetime of the process. Deleting a session leaves a
tombstone so the same id cannot silently come back as a different
conversation.
"""
import asyncio
import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Dict, List, Optional, Set

from backend.app.core.exceptions import SessionAgentMismatch, SessionNotFound
from backend.app.schemas.schemas import ChatRole

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Turn:
    """One message in a conversation"""
    role: ChatRole
    content: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = field(default_factory=utcnow)

    @classmethod
    def user(cls, content: str) -> "Turn":
        return cls(role=ChatRole.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "Turn":
        return cls(role=ChatRole.ASSISTANT, content=content)


@dataclass
class Session:
    session_id: str
    agent_type: str
    messages: List[Turn] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def snapshot(self) -> "Session":
        """Copy that callers can hold without seeing later appends"""
        return replace(self, messages=list(self.messages))


class SessionStore:
    """
    Owns every Session. Callers get snapshots, never the live objects.

    ``lock(session_id)`` hands out one asyncio.Lock per session so a whole
    chat turn (user append, agent call, assistant append) can be serialized
    per conversation without blocking other conversations.
    """

    def __init__(self):
        self._sessions: Dict[str, Session] = {}
        self._deleted: Set[str] = set()
        self._locks: Dict[str, asyncio.Lock] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def lock(self, session_id: str) -> asyncio.Lock:
        """Per-session lock; raises SessionNotFound for a deleted id"""
        if session_id in self._deleted:
            raise SessionNotFound(session_id)

        lock = self._locks.get(session_id)
        if lock is None:
            lock = self._locks[session_id] = asyncio.Lock()
        return lock

    def get_or_create(self, session_id: str, agent_type: str) -> Session:
        """
        Return the session for ``session_id``, creating it when absent.

        Raises:
            SessionNotFound: the id belongs to a deleted session
            SessionAgentMismatch: the session is bound to another agent type
        """
        if session_id in self._deleted:
            raise SessionNotFound(session_id)

        session = self._sessions.get(session_id)
        if session is None:
            session = Session(session_id=session_id, agent_type=agent_type)
            self._sessions[session_id] = session
            logger.info(f"Created session {session_id} for agent '{agent_type}'")
        elif session.agent_type != agent_type:
            raise SessionAgentMismatch(session_id, session.agent_type, agent_type)

        return session.snapshot()

    def append_turn(self, session_id: str, turn: Turn) -> Turn:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)

        session.messages.append(turn)
        session.updated_at = utcnow()
        return turn

    def get(self, session_id: str) -> Optional[Session]:
        session = self._sessions.get(session_id)
        return session.snapshot() if session else None

    def delete(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False

        self._deleted.add(session_id)
        self._locks.pop(session_id, None)
        logger.info(f"Deleted session {session_id} ({len(session.messages)} messages)")
        return True

    def is_deleted(self, session_id: str) -> bool:
        return session_id in self._deleted

    def clear(self) -> None:
        """Drop all sessions and tombstones"""
        self._sessions.clear()
        self._deleted.clear()
        self._locks.clear()
