"""Shared fixtures: a scripted completion oracle and a fixed reference date."""

from __future__ import annotations

import sys

from datetime import date
from pathlib import Path
from typing import Any, Callable, List, Mapping, Tuple, Type, Union

import pytest

from bizflows.flows.base import InterpretationFlow
from bizflows.oracle import OracleFailure, OracleOutput
from bizflows.prompting.backends.jinja_backend import JinjaPromptRenderer
from bizflows.prompting.manager import PromptManager
from bizflows.prompting.types import RenderedPrompt
from bizflows.schemas.fields import Shape

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TODAY = date(2024, 7, 15)

Script = Union[Mapping[str, Any], OracleFailure]


class ScriptedOracle:
    """Replays canned candidates; the last one repeats once the script runs out."""

    def __init__(self, *script: Script) -> None:
        if not script:
            raise ValueError("ScriptedOracle needs at least one response")
        self._script: List[Script] = list(script)
        self.calls: List[Tuple[RenderedPrompt, Shape]] = []

    def complete(self, prompt: RenderedPrompt, output: Shape) -> OracleOutput:
        self.calls.append((prompt, output))
        response = self._script.pop(0) if len(self._script) > 1 else self._script[0]
        if isinstance(response, OracleFailure):
            return response
        return output.project(response)

    @property
    def last_prompt(self) -> str:
        return self.calls[-1][0].text


@pytest.fixture()
def renderer() -> JinjaPromptRenderer:
    return JinjaPromptRenderer(PromptManager())


@pytest.fixture()
def make_flow(
    renderer: JinjaPromptRenderer,
) -> Callable[..., Tuple[InterpretationFlow, ScriptedOracle]]:
    """Build ``flow_cls`` over a ScriptedOracle replaying ``script``."""

    def _factory(
        flow_cls: Type[InterpretationFlow], *script: Script
    ) -> Tuple[InterpretationFlow, ScriptedOracle]:
        oracle = ScriptedOracle(*script)
        flow = flow_cls(oracle, renderer, clock=lambda: TODAY)
        return flow, oracle

    return _factory
