"""Registry for prompt fill providers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, Iterable, Mapping

from bizflows.schemas.fields import TaskSchema


@dataclass(frozen=True)
class PromptFillContext:
    """Context made available to prompt-fill providers."""

    task: TaskSchema
    current_date: date
    inputs: Mapping[str, Any] = field(default_factory=dict)


FillFunc = Callable[[PromptFillContext], Dict[str, object]]


class PromptFillRegistry:
    """Stores prompt fill functions and composes their outputs."""

    def __init__(self) -> None:
        self._fills: list[FillFunc] = []

    def register(self, func: FillFunc) -> None:
        if func not in self._fills:
            self._fills.append(func)

    def unregister(self, func: FillFunc) -> None:
        if func in self._fills:
            self._fills.remove(func)

    def build_payload(self, ctx: PromptFillContext) -> Dict[str, object]:
        payload: Dict[str, object] = {}
        for func in self._fills:
            contribution = func(ctx)
            if contribution:
                payload.update(contribution)
        return payload

    def get_registered(self) -> Iterable[FillFunc]:
        return list(self._fills)
