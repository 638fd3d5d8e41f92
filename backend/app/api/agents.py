"""
Agent API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List
import logging

from backend.app.agents.catalog import get_suggested_questions
from backend.app.core.dependencies import get_dispatcher
from backend.app.core.exceptions import (
    AgentExecutionFailed,
    AgentTypeNotFound,
    FeedbackValidationError,
    InvalidAgentType,
    SessionAgentMismatch,
    SessionNotFound,
)
from backend.app.db.database import get_db
from backend.app.schemas.schemas import (
    AgentDescriptor,
    AgentSuggestions,
    ChatMessage,
    ChatRequest,
    ChatResponse,
    ConversationResponse,
    ErrorResponse,
    FeedbackRequest,
    OperationResponse,
)
from backend.app.services.dispatcher import AgentDispatcher
from backend.app.services.doc_store import save_feedback

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/types", response_model=List[AgentDescriptor])
async def list_agent_types(dispatcher: AgentDispatcher = Depends(get_dispatcher)):
    """Get all available agent types with their descriptions"""
    return dispatcher.list_agent_types()


@router.get(
    "/types/{agent_id}",
    response_model=AgentDescriptor,
    responses={404: {"model": ErrorResponse, "description": "Agent type not found"}}
)
async def get_agent_type(agent_id: str, dispatcher: AgentDispatcher = Depends(get_dispatcher)):
    """Get details about a specific agent type"""
    try:
        return dispatcher.get_agent_type(agent_id)
    except AgentTypeNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Agent type not found")


@router.get(
    "/types/{agent_id}/suggestions",
    response_model=AgentSuggestions,
    responses={404: {"model": ErrorResponse, "description": "Agent type not found"}}
)
async def get_agent_suggestions(agent_id: str, dispatcher: AgentDispatcher = Depends(get_dispatcher)):
    """Starter questions shown for an agent"""
    try:
        agent = dispatcher.get_agent_type(agent_id)
    except AgentTypeNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Agent type not found")

    return AgentSuggestions(agent_type=agent.id, questions=get_suggested_questions(agent.id))


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid agent type"},
        404: {"model": ErrorResponse, "description": "Conversation was deleted"},
        409: {"model": ErrorResponse, "description": "Session bound to another agent"},
        500: {"model": ErrorResponse, "description": "Agent invocation failed"}
    }
)
async def chat(request: ChatRequest, dispatcher: AgentDispatcher = Depends(get_dispatcher)):
    """
    Send a message to an agent and get a response.
    The session is created on its first message.
    """
    try:
        reply = await dispatcher.chat(request.session_id, request.agent_type, request.message)

    except InvalidAgentType:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid agent type")
    except SessionNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Conversation not found")
    except SessionAgentMismatch as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except AgentExecutionFailed as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": "Agent invocation failed",
                "details": e.result.error,
                "code": e.result.error_code,
            }
        )
    except Exception as e:
        logger.error(f"Error processing chat for session {request.session_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": "Failed to invoke agent", "details": str(e)}
        )

    return ChatResponse(
        session_id=reply.session_id,
        agent_type=reply.agent_type,
        message=reply.message,
        message_id=reply.message_id,
        timestamp=reply.timestamp,
    )


@router.get(
    "/conversations/{session_id}",
    response_model=ConversationResponse,
    responses={404: {"model": ErrorResponse, "description": "Conversation not found"}}
)
async def get_conversation(session_id: str, dispatcher: AgentDispatcher = Depends(get_dispatcher)):
    """Get the conversation history for a session"""
    try:
        session = dispatcher.get_conversation(session_id)
    except SessionNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Conversation not found")

    return ConversationResponse(
        session_id=session.session_id,
        agent_type=session.agent_type,
        messages=[
            ChatMessage(id=turn.id, role=turn.role, content=turn.content, timestamp=turn.timestamp)
            for turn in session.messages
        ],
        created_at=session.created_at,
        updated_at=session.updated_at,
    )


@router.delete("/conversations/{session_id}", response_model=OperationResponse)
async def delete_conversation(session_id: str, dispatcher: AgentDispatcher = Depends(get_dispatcher)):
    """Delete a conversation and its history"""
    deleted = dispatcher.delete_conversation(session_id)
    return OperationResponse(
        success=deleted,
        message="Conversation deleted" if deleted else "Conversation not found",
    )


@router.post("/feedback", response_model=OperationResponse)
async def submit_feedback(
    request: FeedbackRequest,
    dispatcher: AgentDispatcher = Depends(get_dispatcher),
    db: Session = Depends(get_db)
):
    """Submit feedback about an agent interaction"""
    try:
        feedback = dispatcher.submit_feedback(
            request.session_id, request.rating,
            message_id=request.message_id, comment=request.comment,
        )
    except FeedbackValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    # Best effort
    try:
        save_feedback(
            db, feedback.session_id, feedback.rating,
            message_id=feedback.message_id, comment=feedback.comment,
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to store feedback for session {feedback.session_id}: {e}")

    return OperationResponse(success=True, message="Thank you for your feedback!")
