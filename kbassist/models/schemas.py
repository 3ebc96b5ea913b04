"""Pydantic schemas for backend payloads and client-side state.

Every payload decoded from the backend passes through these models. Before
validators turn missing or null fields into empty defaults so a partial
response never fails as a whole.
"""

import json
import logging
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    """Answer-generation mode; selects the chat endpoint."""

    RETRIEVAL = "retrieval"
    AGENT = "agent"


class SourceType(str, Enum):
    """Where an indexed document came from."""

    FILE = "file"
    URL = "url"


def _text_or_empty(v: Any) -> str:
    if v is None:
        return ""
    if isinstance(v, str):
        return v
    return json.dumps(v, ensure_ascii=False, default=str)


def _list_or_empty(v: Any) -> list:
    if isinstance(v, list):
        return v
    if v is not None:
        logger.warning(f"Expected a list, got {type(v).__name__}; using empty list")
    return []


def _valid_items(v: Any, model: type[BaseModel]) -> list:
    items = []
    for raw in _list_or_empty(v):
        try:
            items.append(model.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"Skipping malformed {model.__name__}: {e.error_count()} error(s)")
    return items


def _lenient_timestamp(v: Any) -> datetime | None:
    if v is None or isinstance(v, datetime):
        return v
    if isinstance(v, str):
        try:
            return datetime.fromisoformat(v)
        except ValueError:
            logger.warning(f"Unparseable timestamp {v!r}; leaving it blank")
    return None


class Citation(BaseModel):
    """Pointer to supporting evidence for part of an answer.

    Attributes:
        source: Source identifier (file name or URL), if known.
        page: Page number within the source, if known.
        snippet: Supporting text excerpt.
    """

    model_config = ConfigDict(frozen=True)

    source: str | None = None
    page: int | None = None
    snippet: str = ""

    @field_validator("snippet", mode="before")
    @classmethod
    def default_snippet(cls, v: Any) -> str:
        return _text_or_empty(v)

    @field_validator("source", mode="before")
    @classmethod
    def source_as_text(cls, v: Any) -> str | None:
        return None if v is None else _text_or_empty(v)

    @field_validator("page", mode="before")
    @classmethod
    def page_or_none(cls, v: Any) -> int | None:
        if isinstance(v, bool):
            return None
        if isinstance(v, int):
            return v
        if isinstance(v, str) and v.strip().isdigit():
            return int(v)
        return None


class Step(BaseModel):
    """One tool invocation reported by the agent, in execution order.

    Attributes:
        tool: Tool name.
        input: Tool input, rendered as text.
        output: Tool output, rendered as text.
        citations: Evidence produced by this step.
    """

    model_config = ConfigDict(frozen=True)

    tool: str = ""
    input: str = ""
    output: str = ""
    citations: list[Citation] = Field(default_factory=list)

    @field_validator("tool", "input", "output", mode="before")
    @classmethod
    def default_text(cls, v: Any) -> str:
        return _text_or_empty(v)

    @field_validator("citations", mode="before")
    @classmethod
    def default_citations(cls, v: Any) -> list:
        return _valid_items(v, Citation)


class ChatRequest(BaseModel):
    """Request payload for both chat endpoints.

    Attributes:
        question: The user's question, sent as typed.
        chat_id: Conversation to continue, or None to start a new one.
    """

    question: str = Field(..., min_length=1)
    chat_id: int | None = None


class ChatResponse(BaseModel):
    """Normalised response from /chat/rag or /chat/agent.

    Attributes:
        answer: Generated answer text.
        citations: Evidence in server order.
        steps: Agent steps in execution order (empty in retrieval mode).
        chat_id: Server-assigned conversation identifier, if reported.
    """

    answer: str = ""
    citations: list[Citation] = Field(default_factory=list)
    steps: list[Step] = Field(default_factory=list)
    chat_id: int | None = None

    @field_validator("answer", mode="before")
    @classmethod
    def default_answer(cls, v: Any) -> str:
        return _text_or_empty(v)

    @field_validator("citations", mode="before")
    @classmethod
    def default_citations(cls, v: Any) -> list:
        return _valid_items(v, Citation)

    @field_validator("steps", mode="before")
    @classmethod
    def default_steps(cls, v: Any) -> list:
        return _valid_items(v, Step)


class ConversationTurn(BaseModel):
    """The question and response currently on screen.

    Replaced wholesale by each new response; never merged with the previous one.
    """

    model_config = ConfigDict(frozen=True)

    question: str
    answer: str = ""
    citations: list[Citation] = Field(default_factory=list)
    steps: list[Step] = Field(default_factory=list)


class Conversation(BaseModel):
    """A past conversation as listed by /chat/history.

    Attributes:
        id: Server-assigned identifier.
        title: Conversation title (may be empty).
        created_at: Creation time, None when missing or unparseable.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    title: str = ""
    created_at: datetime | None = None

    @field_validator("title", mode="before")
    @classmethod
    def default_title(cls, v: Any) -> str:
        return _text_or_empty(v)

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_created_at(cls, v: Any) -> datetime | None:
        return _lenient_timestamp(v)

    @property
    def display_title(self) -> str:
        return self.title.strip() or "Untitled conversation"

    @property
    def display_date(self) -> str:
        if self.created_at is None:
            return ""
        return self.created_at.strftime("%Y-%m-%d %H:%M")


class Document(BaseModel):
    """An indexed document as listed by /kb/documents.

    Attributes:
        id: Server-assigned identifier.
        title: Display title.
        source_type: Whether it was ingested from a file or a URL.
        source_ref: File name or URL it was ingested from.
        created_at: Ingestion time, None when missing or unparseable.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    title: str = ""
    source_type: SourceType
    source_ref: str = ""
    created_at: datetime | None = None

    @field_validator("title", "source_ref", mode="before")
    @classmethod
    def default_text(cls, v: Any) -> str:
        return _text_or_empty(v)

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_created_at(cls, v: Any) -> datetime | None:
        return _lenient_timestamp(v)

    @property
    def display_date(self) -> str:
        if self.created_at is None:
            return ""
        return self.created_at.strftime("%Y-%m-%d")


class HealthStatus(BaseModel):
    """Backend health probe payload.

    Attributes:
        status: Status string reported by the backend.
        mock_mode: Whether the backend answers with mock models.
    """

    status: str = ""
    mock_mode: bool = False

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v: Any) -> str:
        return _text_or_empty(v)

    @field_validator("mock_mode", mode="before")
    @classmethod
    def default_mock_mode(cls, v: Any) -> bool:
        if isinstance(v, str):
            return v.strip().lower() in ("1", "true", "yes")
        return bool(v)


class SystemStatus(BaseModel):
    """Merged result of the three status probes.

    Attributes:
        health: Health payload, None when the probe failed.
        document_count: Number of indexed documents (0 when the probe failed).
        conversation_count: Number of past conversations (0 when the probe failed).
    """

    health: HealthStatus | None = None
    document_count: int = Field(default=0, ge=0)
    conversation_count: int = Field(default=0, ge=0)

    @property
    def online(self) -> bool:
        return self.health is not None

    @property
    def run_mode(self) -> str:
        if self.health is not None and self.health.mock_mode:
            return "mock"
        return "real"


class MutationOutcome(BaseModel):
    """Result of an ingestion or deletion call, reported alongside the reload.

    Attributes:
        action: "upload", "ingest_url" or "delete".
        target: File name, URL or document id the action was applied to.
        ok: Whether the backend accepted the mutation.
        message: User-facing summary.
    """

    model_config = ConfigDict(frozen=True)

    action: str
    target: str
    ok: bool
    message: str
