"""Classifier flow: bucket a free-text query into one task category."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from bizflows.flows.base import InterpretationFlow, Repaired
from bizflows.schemas.tasks import CLASSIFY_TASK
from bizflows.types import Classification


class ClassifyTaskFlow(InterpretationFlow[Classification]):
    schema = CLASSIFY_TASK

    def repair(
        self, candidate: Dict[str, Any], inputs: Mapping[str, Any]
    ) -> Repaired:
        # The echoed query is never trusted.
        query = inputs["text_query"]
        if candidate.get("original_query") != query:
            self._logger.debug("Replacing echoed query with caller input")
        candidate["original_query"] = query
        return candidate

    def build(self, value: Mapping[str, Any]) -> Classification:
        return Classification.from_dict(value)
