"""PromptRenderer backed by the Jinja PromptManager."""

from __future__ import annotations

from typing import Mapping, MutableMapping

from bizflows.exceptions import SchemaWiringError
from bizflows.prompting.backends.base import PromptRenderer
from bizflows.prompting.manager import PromptManager
from bizflows.prompting.types import (
    ChatMessage,
    PromptTaskSpec,
    RenderedPrompt,
)
from bizflows.schemas.tasks import TASK_SCHEMAS

DEFAULT_TEMPLATE_MAP = {name: schema.template for name, schema in TASK_SCHEMAS.items()}


class JinjaPromptRenderer(PromptRenderer):
    """Adapter that renders PromptTaskSpecs via the PromptManager."""

    def __init__(
        self,
        prompt_manager: PromptManager,
        template_map: Mapping[str, str] | None = None,
    ) -> None:
        self._prompt_manager = prompt_manager
        self._template_map: MutableMapping[str, str] = dict(DEFAULT_TEMPLATE_MAP)
        self._template_map.update(template_map or {})

    @property
    def prompt_manager(self) -> PromptManager:
        return self._prompt_manager

    def template_for(self, kind: str) -> str:
        try:
            return self._template_map[kind]
        except KeyError:
            raise SchemaWiringError(
                f"No prompt template registered for task '{kind}'"
            ) from None

    def render(self, spec: PromptTaskSpec) -> RenderedPrompt:
        template_name = self.template_for(spec.kind)
        # Metadata items go straight into the template context.
        text = self._prompt_manager.render(template_name, **spec.metadata)
        message = ChatMessage(
            role="user", content=text, metadata={"task_id": spec.task_id}
        )
        return RenderedPrompt(
            message=message,
            preview=text,
            template=template_name,
        )
