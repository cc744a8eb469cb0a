"""Backends for the prompt layer."""

from bizflows.prompting.backends.base import PromptRenderer
from bizflows.prompting.backends.jinja_backend import JinjaPromptRenderer

__all__ = [
    "JinjaPromptRenderer",
    "PromptRenderer",
]
