"""Pydantic schemas for DualModel gateway payloads and tool results."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Chat message roles understood by the gateway."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


# --- Gateway Request/Response ---


class ChatMessage(BaseModel):
    """A single conversation message."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    role: Role
    content: str


class ChatCompletionRequest(BaseModel):
    """Body of a chat-completions POST."""

    model_config = ConfigDict(frozen=True)

    model: str
    messages: tuple[ChatMessage, ...]
    temperature: float
    max_tokens: int


class ChoiceMessage(BaseModel):
    """Message returned inside a completion choice."""

    role: str | None = None
    content: str | None = None


class Choice(BaseModel):
    """One completion choice."""

    message: ChoiceMessage | None = None
    finish_reason: str | None = None


class Usage(BaseModel):
    """Token accounting reported by the gateway."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChatCompletionResponse(BaseModel):
    """Body of a chat-completions reply."""

    id: str | None = None
    choices: list[Choice] = Field(default_factory=list)
    usage: Usage | None = None

    def first_content(self) -> str | None:
        """Text of the first choice, or None when absent."""
        if not self.choices or self.choices[0].message is None:
            return None
        return self.choices[0].message.content


# --- Results ---


class ModelResponse(BaseModel):
    """Successful answer from one backend."""

    label: str
    model: str
    content: str


class ResultMetadata(BaseModel):
    """Diagnostic metadata attached to a combined result."""

    timestamp: str
    models_used: dict[str, str]
    system_prompt_used: str


class DualResult(BaseModel):
    """Combined answers of every configured backend."""

    responses: list[ModelResponse]
    metadata: ResultMetadata


# --- Tool Surface ---


class ToolDescriptor(BaseModel):
    """Advertised tool: name, description and JSON input schema."""

    name: str
    description: str
    input_schema: dict[str, Any]


class ToolOutcome(BaseModel):
    """Rendered result of one tool call, success or failure."""

    text: str
    is_error: bool = False
    error_code: str | None = None
