"""Pydantic models for backend payloads and client state.

Provides type safety and defensive defaulting for everything decoded from the
backend, plus the value objects the controllers expose.

Models:
    - ChatRequest / ChatResponse: Chat endpoint payloads
    - Citation / Step: Evidence and agent trace entries
    - ConversationTurn: The question/answer currently displayed
    - Conversation / Document: Server-held collections
    - HealthStatus / SystemStatus: Status probes and their merge
    - MutationOutcome: Result of an ingestion or deletion
"""

from kbassist.models.schemas import (
    ChatRequest,
    ChatResponse,
    Citation,
    Conversation,
    ConversationTurn,
    Document,
    HealthStatus,
    Mode,
    MutationOutcome,
    SourceType,
    Step,
    SystemStatus,
)

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "Citation",
    "Conversation",
    "ConversationTurn",
    "Document",
    "HealthStatus",
    "Mode",
    "MutationOutcome",
    "SourceType",
    "Step",
    "SystemStatus",
]
