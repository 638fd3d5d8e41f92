"""
FastAPI dependencies for the services created in the application lifespan
"""
from fastapi import Request

from backend.app.services.agent_bridge import AgentExecutor
from backend.app.services.dispatcher import AgentDispatcher


def get_dispatcher(request: Request) -> AgentDispatcher:
    """Dispatcher built at startup and stored on ``app.state``"""
    return request.app.state.dispatcher


def get_executor(request: Request) -> AgentExecutor:
    return request.app.state.dispatcher.executor
