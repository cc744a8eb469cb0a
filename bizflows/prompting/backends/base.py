"""Protocols for prompt layer components."""

from __future__ import annotations

from typing import Protocol

from bizflows.prompting.types import PromptTaskSpec, RenderedPrompt


class PromptRenderer(Protocol):
    """Turns a PromptTaskSpec into the prompt sent to the model."""

    def render(self, spec: PromptTaskSpec) -> RenderedPrompt:
        """Render a prompt for ``spec``."""
        ...
