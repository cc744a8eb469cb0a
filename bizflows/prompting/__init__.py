"""Prompt rendering: Jinja templates, fills and renderer backends."""

from bizflows.prompting.backends.jinja_backend import JinjaPromptRenderer
from bizflows.prompting.fills import (
    PromptExample,
    PromptFillContext,
    prompt_fills,
    register_task_examples,
)
from bizflows.prompting.manager import PromptManager
from bizflows.prompting.types import (
    ChatMessage,
    PromptTaskSpec,
    RenderedPrompt,
)

__all__ = [
    "ChatMessage",
    "JinjaPromptRenderer",
    "PromptExample",
    "PromptFillContext",
    "PromptManager",
    "PromptTaskSpec",
    "RenderedPrompt",
    "prompt_fills",
    "register_task_examples",
]
