"""
Domain errors raised by the dispatch and session layers.
Routes translate these into HTTP responses.
"""
from enum import Enum


class ExecutorErrorCode(str, Enum):
    """Failure kinds reported by an agent executor"""
    LAUNCH_FAILURE = "launch_failure"
    NON_ZERO_EXIT = "non_zero_exit"
    TIMEOUT = "timeout"
    AGENT_ERROR = "agent_error"


class DispatchError(Exception):
    """Base class for dispatcher errors"""


class InvalidAgentType(DispatchError):
    def __init__(self, agent_type: str):
        super().__init__(f"Invalid agent type: {agent_type}")
        self.agent_type = agent_type


class AgentTypeNotFound(DispatchError):
    def __init__(self, agent_type: str):
        super().__init__(f"Agent type not found: {agent_type}")
        self.agent_type = agent_type


class SessionNotFound(DispatchError):
    def __init__(self, session_id: str):
        super().__init__(f"Conversation not found: {session_id}")
        self.session_id = session_id


class SessionAgentMismatch(DispatchError):
    """A session id was reused with a different agent type than it was created with"""

    def __init__(self, session_id: str, bound_agent_type: str, requested_agent_type: str):
        super().__init__(
            f"Session {session_id} is bound to agent '{bound_agent_type}', "
            f"not '{requested_agent_type}'"
        )
        self.session_id = session_id
        self.bound_agent_type = bound_agent_type
        self.requested_agent_type = requested_agent_type


class FeedbackValidationError(DispatchError):
    pass


class AgentExecutionFailed(DispatchError):
    """The executor returned a result carrying an error"""

    def __init__(self, result):
        super().__init__(result.error)
        self.result = result
