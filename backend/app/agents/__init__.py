"""Agent catalog and the local keyword responders"""
from .catalog import get_agent, list_agents, resolve_agent_id, get_suggested_questions
from .responders import respond

__all__ = ["get_agent", "list_agents", "resolve_agent_id", "get_suggested_questions", "respond"]
