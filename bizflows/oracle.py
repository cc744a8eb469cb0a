"""Completion oracle: turns a rendered prompt plus an output shape into data.

The oracle is the only place that talks to a model. It returns either a dict
holding the keys of the requested output shape or an ``OracleFailure``; it
never raises for model-side problems (transport errors, timeouts, refusals,
unparsable output), so flows can treat every one of them the same way.
"""

from __future__ import annotations

import json
import logging

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, Union

from bizflows.llm.providers import LLMProvider
from bizflows.logging import redact
from bizflows.prompting.types import RenderedPrompt
from bizflows.schemas.fields import Shape

_LOGGER = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a careful assistant for a small-business management app. "
    "Answer with a single JSON object and nothing else."
)


@dataclass(frozen=True, slots=True)
class OracleFailure:
    """The oracle could not produce a value for the requested shape."""

    reason: str


OracleOutput = Union[Dict[str, Any], OracleFailure]


class CompletionOracle(Protocol):
    def complete(self, prompt: RenderedPrompt, output: Shape) -> OracleOutput:
        """Return a candidate for ``output`` or an OracleFailure."""
        ...


def render_output_instructions(output: Shape) -> str:
    schema = json.dumps(output.to_json_schema(), indent=2)
    return (
        "Respond with a JSON object matching this JSON Schema. Omit optional "
        "fields you cannot determine instead of guessing.\n"
        f"{schema}"
    )


def _strip_fences(text: str) -> str:
    if not text.startswith("```"):
        return text
    lines = [line for line in text.split("\n") if not line.strip().startswith("```")]
    return "\n".join(lines).strip()


def parse_structured_output(raw: Optional[str], output: Shape) -> OracleOutput:
    """Parse model text into a dict restricted to ``output``'s fields."""

    text = (raw or "").strip()
    if not text:
        return OracleFailure("model returned no output")
    text = _strip_fences(text)
    if not text.startswith("{"):
        start, end = text.find("{"), text.rfind("}")
        if start == -1 or end <= start:
            return OracleFailure("model output is not JSON")
        text = text[start : end + 1]
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        return OracleFailure(f"JSON parse error: {exc}")
    if not isinstance(data, dict):
        return OracleFailure("model output is not a JSON object")
    return output.project(data)


class LLMCompletionOracle:
    """CompletionOracle backed by an LLMProvider; one call per ``complete``."""

    def __init__(
        self,
        provider: LLMProvider,
        *,
        system_prompt: str = SYSTEM_PROMPT,
        generation_kwargs: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._provider = provider
        self._system_prompt = system_prompt
        self._generation_kwargs = dict(generation_kwargs or {})

    def complete(self, prompt: RenderedPrompt, output: Shape) -> OracleOutput:
        text = f"{prompt.text}\n\n{render_output_instructions(output)}"
        try:
            raw = self._provider.generate(
                text,
                system=self._system_prompt,
                json_mode=True,
                metadata={"template": prompt.template},
                **self._generation_kwargs,
            )
        except Exception as exc:
            # Every transport fault (timeouts included) is an oracle failure.
            _LOGGER.warning(
                "Completion failed for %s: %s",
                prompt.template,
                redact(str(exc)),
            )
            return OracleFailure(f"provider error: {exc.__class__.__name__}")
        _LOGGER.debug("Raw completion for %s: %s", prompt.template, redact(raw or ""))
        result = parse_structured_output(raw, output)
        if isinstance(result, OracleFailure):
            _LOGGER.warning(
                "Unusable completion for %s: %s", prompt.template, result.reason
            )
        return result
