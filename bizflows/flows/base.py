"""Generic interpretation flow: validate, render, complete, repair, validate."""

from __future__ import annotations

import logging

from abc import ABC, abstractmethod
from datetime import date
from typing import (
    Any,
    Callable,
    ClassVar,
    Dict,
    Generic,
    Mapping,
    Optional,
    TypeVar,
    Union,
)

from bizflows.flows.defaults import apply_defaults
from bizflows.oracle import CompletionOracle, OracleFailure
from bizflows.prompting.backends.base import PromptRenderer
from bizflows.prompting.fills import (
    PromptFillContext,
    PromptFillRegistry,
    prompt_fills,
)
from bizflows.prompting.types import PromptTaskSpec, RenderedPrompt
from bizflows.schemas.fields import TaskSchema
from bizflows.types import Failed, InterpretationResult, Ok

ValueT = TypeVar("ValueT")

NO_OUTPUT_MESSAGE = (
    "AI model did not return an output. Please try rephrasing your request."
)

INVALID_REQUEST_MESSAGE = "Request must map field names to values."

Repaired = Union[Dict[str, Any], Failed]


class InterpretationFlow(ABC, Generic[ValueT]):
    """One task's interpretation pipeline.

    Subclasses set ``schema`` and implement ``build``; most also override
    ``repair`` with their task's post-validation rules. ``interpret`` never
    raises for bad input or bad model output: every such outcome is a
    ``Failed`` carrying a message meant for the end user.
    """

    schema: ClassVar[TaskSchema]

    def __init__(
        self,
        oracle: CompletionOracle,
        renderer: PromptRenderer,
        *,
        fills: Optional[PromptFillRegistry] = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._oracle = oracle
        self._renderer = renderer
        self._fills = fills or prompt_fills
        self._clock = clock
        self._logger = logging.getLogger(type(self).__module__)

    @property
    def task(self) -> str:
        return self.schema.name

    def interpret(
        self, payload: Mapping[str, Any], *, today: Optional[date] = None
    ) -> InterpretationResult[ValueT]:
        if not isinstance(payload, Mapping):
            return Failed(INVALID_REQUEST_MESSAGE)
        inputs = self.schema.input.project(payload)
        errors = self.schema.input.validate(inputs)
        if errors:
            self._logger.info("%s rejected input: %s", self.task, errors)
            return Failed("; ".join(errors))

        rendered = self.render(inputs, today or self._clock())
        candidate = self._oracle.complete(rendered, self.schema.output)
        if isinstance(candidate, OracleFailure):
            self._logger.warning(
                "%s got no usable output: %s", self.task, candidate.reason
            )
            return Failed(NO_OUTPUT_MESSAGE)

        filled = apply_defaults(self.task, candidate, inputs)
        repaired = self.repair(filled, inputs)
        if isinstance(repaired, Failed):
            self._logger.warning(
                "%s downgraded to failure: %s", self.task, repaired.reason
            )
            return repaired

        errors = self.schema.output.validate(repaired)
        if errors:
            self._logger.warning(
                "%s output violates its contract: %s", self.task, errors
            )
            return Failed(
                "The AI response was incomplete or invalid "
                f"({'; '.join(errors)}). Please try rephrasing your request."
            )

        self._logger.info("%s interpreted successfully", self.task)
        return Ok(self.build(repaired))

    def render(
        self, inputs: Mapping[str, Any], current_date: date
    ) -> RenderedPrompt:
        """Render this task's prompt; identical arguments give identical text."""

        fill_context = PromptFillContext(
            task=self.schema, current_date=current_date, inputs=inputs
        )
        context = self._fills.build_payload(fill_context)
        context.update(inputs)
        spec = PromptTaskSpec(
            kind=self.task, task_id=self.task, metadata=context
        )
        return self._renderer.render(spec)

    def repair(
        self, candidate: Dict[str, Any], inputs: Mapping[str, Any]
    ) -> Repaired:
        """Apply task rules to a defaulted candidate."""

        return candidate

    @abstractmethod
    def build(self, value: Mapping[str, Any]) -> ValueT:
        """Convert a validated candidate into the task's value type."""
