"""Appointment suggestion flow."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from bizflows.flows.base import InterpretationFlow, Repaired
from bizflows.schemas.fields import is_blank
from bizflows.schemas.tasks import APPOINTMENT_TIMES
from bizflows.types import AppointmentSuggestion, Failed

NO_SUGGESTION_MESSAGE = (
    "AI model did not return appointment suggestions. Please try again."
)


class AppointmentTimesFlow(InterpretationFlow[AppointmentSuggestion]):
    """There is no deterministic fallback, so a partial answer is a failure."""

    schema = APPOINTMENT_TIMES

    def repair(
        self, candidate: Dict[str, Any], inputs: Mapping[str, Any]
    ) -> Repaired:
        if is_blank(candidate.get("suggested_times")) or is_blank(
            candidate.get("reasoning")
        ):
            return Failed(NO_SUGGESTION_MESSAGE)
        return candidate

    def build(self, value: Mapping[str, Any]) -> AppointmentSuggestion:
        return AppointmentSuggestion.from_dict(value)
