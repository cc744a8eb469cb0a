"""Prompt fill registry exposed for customization."""

from bizflows.prompting.fills.defaults import (
    FILL_KEYS,
    TASK_EXAMPLES,
    PromptExample,
    register_default_fills,
    register_task_examples,
)
from bizflows.prompting.fills.registry import (
    PromptFillContext,
    PromptFillRegistry,
)

prompt_fills = PromptFillRegistry()
register_default_fills(prompt_fills)

__all__ = [
    "FILL_KEYS",
    "PromptExample",
    "PromptFillContext",
    "PromptFillRegistry",
    "TASK_EXAMPLES",
    "prompt_fills",
    "register_task_examples",
]
