"""Agno agent logic for the MateTutor persona.

Handles the single conversation each page keeps with the Gemini model.

Responsibilities:
    - Agent initialization with the tutor persona as system instructions
    - Per-session conversation history
    - Packaging text and inline file parts for the model
    - Streaming reply chunks and surfacing failures as ConversationError

Leverages the Agno framework for agent lifecycle management.
Maintains clean separation from the UI layer.
"""

from src.agent.chat_agent import (
    ConversationError,
    ConversationSession,
    TutorAgentService,
    get_agent_service,
)
from src.agent.config import TutorConfig, get_tutor_config

__all__ = [
    "ConversationError",
    "ConversationSession",
    "TutorAgentService",
    "TutorConfig",
    "get_agent_service",
    "get_tutor_config",
]
