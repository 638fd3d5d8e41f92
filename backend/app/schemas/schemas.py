"""
Pydantic schemas for API requests and responses
"""
from pydantic import BaseModel, Field
from typing import List, Optional, Dict
from datetime import datetime
from enum import Enum


class ChatRole(str, Enum):
    """Chat message roles"""
    USER = "user"
    ASSISTANT = "assistant"


class AgentDescriptor(BaseModel):
    """Display metadata for one agent"""
    id: str
    name: str
    description: str
    icon: str

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "usage",
                "name": "Usage Assistant",
                "description": "Helps you understand how to use WatsonX Orchestrate effectively.",
                "icon": "💡"
            }
        }


class AgentSuggestions(BaseModel):
    """Starter questions for an agent"""
    agent_type: str = Field(..., alias="agentType")
    questions: List[str]

    class Config:
        populate_by_name = True


class AgentResult(BaseModel):
    """
    Outcome of one agent invocation.

    This is also the JSON object an external agent worker prints on stdout.
    A result with ``error`` set is a failure and its ``response`` is empty.
    """
    session_id: str = ""
    agent_type: str = ""
    response: str = ""
    error: Optional[str] = None
    # Not part of the worker's stdout contract
    error_code: Optional[str] = Field(default=None, exclude=True)

    @property
    def failed(self) -> bool:
        return bool(self.error)

    @classmethod
    def failure(cls, session_id: str, agent_type: str, error: str, code: Optional[str] = None) -> "AgentResult":
        return cls(session_id=session_id, agent_type=agent_type, response="", error=error, error_code=code)


class ChatRequest(BaseModel):
    """Chat request model"""
    session_id: str = Field(..., alias="sessionId", min_length=1)
    agent_type: str = Field(..., alias="agentType", min_length=1)
    message: str = Field(..., min_length=1)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "sessionId": "8f14e45f-ceea-467f-a8f4-6f2d9d5a2c11",
                "agentType": "usage",
                "message": "How do I create a skill?"
            }
        }


class ChatResponse(BaseModel):
    """Chat response model"""
    session_id: str = Field(..., alias="sessionId")
    agent_type: str = Field(..., alias="agentType")
    message: str
    message_id: Optional[str] = Field(None, alias="messageId")
    timestamp: datetime

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "sessionId": "8f14e45f-ceea-467f-a8f4-6f2d9d5a2c11",
                "agentType": "usage",
                "message": "## Working with Skills\n\nSkills are the building blocks...",
                "messageId": "3c59dc048e8850243be8079a5c74d079",
                "timestamp": "2026-01-01T12:00:00Z"
            }
        }


class ChatMessage(BaseModel):
    """One turn of a conversation"""
    id: str
    role: ChatRole
    content: str
    timestamp: datetime


class ConversationResponse(BaseModel):
    """Conversation history for a session"""
    session_id: str = Field(..., alias="sessionId")
    agent_type: str = Field(..., alias="agentType")
    messages: List[ChatMessage]
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    class Config:
        populate_by_name = True


class FeedbackRequest(BaseModel):
    """Feedback about an agent interaction"""
    session_id: str = Field(..., alias="sessionId", min_length=1)
    message_id: Optional[str] = Field(None, alias="messageId")
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=2000)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "sessionId": "8f14e45f-ceea-467f-a8f4-6f2d9d5a2c11",
                "messageId": "3c59dc048e8850243be8079a5c74d079",
                "rating": 5,
                "comment": "Clear steps, thanks!"
            }
        }


class OperationResponse(BaseModel):
    """Generic success/message acknowledgement"""
    success: bool
    message: str


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str


class ReadinessResponse(BaseModel):
    status: str
    timestamp: datetime
    checks: Dict[str, str]


class ErrorResponse(BaseModel):
    """Error response model"""
    message: str
    details: Optional[str] = None
    code: Optional[str] = None
