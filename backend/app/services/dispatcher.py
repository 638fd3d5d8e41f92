"""
Dispatcher: validates chat requests, keeps the session transcript and calls
the agent executor.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from backend.app.agents.catalog import get_agent, list_agents
from backend.app.core.exceptions import (
    AgentExecutionFailed,
    AgentTypeNotFound,
    FeedbackValidationError,
    InvalidAgentType,
    SessionNotFound,
)
from backend.app.schemas.schemas import AgentDescriptor
from backend.app.services.agent_bridge import AgentExecutor
from backend.app.services.session_store import Session, SessionStore, Turn, utcnow

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class ChatReply:
    session_id: str
    agent_type: str
    message: str
    message_id: str
    timestamp: datetime


@dataclass(frozen=True)
class FeedbackRecord:
    session_id: str
    rating: int
    message_id: Optional[str] = None
    comment: Optional[str] = None


class AgentDispatcher:
    """
    Routes chat messages to the configured executor.

    A chat turn for one session runs under that session's lock: the user turn
    is appended, the executor is awaited and the assistant turn is appended
    before the next request for the same session can start. If the executor
    fails, the user turn stays in the transcript and AgentExecutionFailed is
    raised.
    """

    def __init__(self, sessions: SessionStore, executor: AgentExecutor):
        self.sessions = sessions
        self.executor = executor

    def list_agent_types(self) -> List[AgentDescriptor]:
        return list_agents()

    def get_agent_type(self, agent_id: str) -> AgentDescriptor:
        agent = get_agent(agent_id)
        if agent is None:
            raise AgentTypeNotFound(agent_id)
        return agent

    async def chat(self, session_id: str, agent_type: str, message: str) -> ChatReply:
        if get_agent(agent_type) is None:
            raise InvalidAgentType(agent_type)

        async with self.sessions.lock(session_id):
            self.sessions.get_or_create(session_id, agent_type)
            self.sessions.append_turn(session_id, Turn.user(message))

            logger.info(f"Invoking {self.executor.name} agent '{agent_type}' for session {session_id}")
            result = await self.executor.invoke(agent_type, session_id, message)

            if result.failed:
                logger.error(f"Agent '{agent_type}' failed for session {session_id}: {result.error}")
                raise AgentExecutionFailed(result)

            reply = self.sessions.append_turn(session_id, Turn.assistant(result.response))

        return ChatReply(
            session_id=session_id,
            agent_type=agent_type,
            message=reply.content,
            message_id=reply.id,
            timestamp=utcnow(),
        )

    def get_conversation(self, session_id: str) -> Session:
        session = self.sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def delete_conversation(self, session_id: str) -> bool:
        return self.sessions.delete(session_id)

    def submit_feedback(
        self,
        session_id: str,
        rating: int,
        message_id: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> FeedbackRecord:
        if not session_id:
            raise FeedbackValidationError("sessionId must not be empty")
        if isinstance(rating, bool) or not isinstance(rating, int):
            raise FeedbackValidationError("rating must be an integer")
        if not MIN_RATING <= rating <= MAX_RATING:
            raise FeedbackValidationError(f"rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}")

        logger.info(f"Feedback received for session {session_id}: rating={rating}")
        return FeedbackRecord(session_id=session_id, rating=rating, message_id=message_id, comment=comment)
