"""Pydantic models shared across the tutor.

Provides type safety and validation for everything that crosses a seam
between the UI, the orchestrator and the AI service.

Models:
    - Role: Transcript entry owner (user, model, loading)
    - Theme: Light or dark page theme
    - TurnPhase: Chat turn lifecycle states
    - TextPart / InlineDataPart: Parts of an outgoing message
    - PendingAttachment: File waiting to be sent with the next message
"""

from src.models.schemas import (
    InlineDataPart,
    MessagePart,
    PendingAttachment,
    Role,
    TextPart,
    Theme,
    TurnPhase,
    build_message_parts,
)

__all__ = [
    "InlineDataPart",
    "MessagePart",
    "PendingAttachment",
    "Role",
    "TextPart",
    "Theme",
    "TurnPhase",
    "build_message_parts",
]
