"""
Agent catalog: the fixed set of agents the service can talk to
"""
from typing import Dict, List, Optional, Tuple

from backend.app.schemas.schemas import AgentDescriptor


AGENT_TYPES: Tuple[AgentDescriptor, ...] = (
    AgentDescriptor(
        id="admin-setup",
        name="Admin Setup Guide",
        description=(
            "Guides administrators through WatsonX Orchestrate setup and configuration. "
            "Helps with user management, security settings, and integrations."
        ),
        icon="⚙️",
    ),
    AgentDescriptor(
        id="usage",
        name="Usage Assistant",
        description=(
            "Helps you understand how to use WatsonX Orchestrate effectively. "
            "Ask about creating skills, building automations, or using the catalog."
        ),
        icon="💡",
    ),
    AgentDescriptor(
        id="troubleshoot",
        name="Troubleshooting Bot",
        description=(
            "Diagnoses and resolves issues with WatsonX Orchestrate. "
            "Describe your problem and I'll help you find a solution."
        ),
        icon="🔧",
    ),
    AgentDescriptor(
        id="best-practices",
        name="Best Practices Coach",
        description=(
            "Provides optimization tips and best practices. "
            "I can help you design better workflows and improve performance."
        ),
        icon="🏆",
    ),
    AgentDescriptor(
        id="docs",
        name="Documentation Helper",
        description=(
            "Navigates and explains WatsonX Orchestrate documentation. "
            "Ask me about any feature and I'll find the relevant docs."
        ),
        icon="📚",
    ),
)

_AGENTS_BY_ID: Dict[str, AgentDescriptor] = {agent.id: agent for agent in AGENT_TYPES}

# Alternative spellings accepted by the worker CLI
AGENT_ALIASES: Dict[str, str] = {
    "admin_setup": "admin-setup",
    "adminsetup": "admin-setup",
    "usage-assistant": "usage",
    "usage_assistant": "usage",
    "troubleshooting": "troubleshoot",
    "best_practices": "best-practices",
    "bestpractices": "best-practices",
    "docs-helper": "docs",
    "docs_helper": "docs",
    "documentation": "docs",
}

SUGGESTED_QUESTIONS: Dict[str, List[str]] = {
    "admin-setup": [
        "How do I set up WXO?",
        "Configure SSO",
        "Manage user permissions",
    ],
    "usage": [
        "How do I create a skill?",
        "Build a workflow",
        "Use the catalog",
    ],
    "troubleshoot": [
        "I can't log in",
        "Skill is failing",
        "Integration not working",
    ],
    "best-practices": [
        "Workflow design tips",
        "Security best practices",
        "Performance optimization",
    ],
    "docs": [
        "Getting started guide",
        "API documentation",
        "Find integration docs",
    ],
}

DEFAULT_SUGGESTIONS = ["How can you help me?"]


def list_agents() -> List[AgentDescriptor]:
    """All agents, in display order"""
    return list(AGENT_TYPES)


def get_agent(agent_id: str) -> Optional[AgentDescriptor]:
    """Descriptor for ``agent_id`` or None when the id is not in the catalog"""
    return _AGENTS_BY_ID.get(agent_id)


def agent_ids() -> List[str]:
    return [agent.id for agent in AGENT_TYPES]


def resolve_agent_id(name: str) -> Optional[str]:
    """Map a canonical id or one of its aliases to the canonical id"""
    key = name.strip().lower()
    if key in _AGENTS_BY_ID:
        return key
    return AGENT_ALIASES.get(key)


def get_suggested_questions(agent_id: str) -> List[str]:
    return list(SUGGESTED_QUESTIONS.get(agent_id, DEFAULT_SUGGESTIONS))
