"""Shared dataclasses for the prompt layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional

Role = Literal["system", "user", "assistant"]


@dataclass(slots=True)
class ChatMessage:
    """Single chat message exchanged with a model."""

    role: Role
    content: str
    name: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class PromptTaskSpec:
    """Everything a renderer needs to build one task's prompt."""

    kind: str
    task_id: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class RenderedPrompt:
    """Result of rendering a prompt via a PromptRenderer."""

    message: ChatMessage
    preview: Optional[str] = None
    template: Optional[str] = None

    @property
    def text(self) -> str:
        return self.message.content
