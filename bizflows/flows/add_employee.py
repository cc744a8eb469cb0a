"""Employee extraction flow: free text to an employee-creation request."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from bizflows.flows.base import InterpretationFlow, Repaired
from bizflows.flows.defaults import EMPLOYEE_NAME_REQUIRED_MESSAGE
from bizflows.schemas.fields import is_blank
from bizflows.schemas.tasks import ADD_EMPLOYEE
from bizflows.types import EmployeeExtraction, Failed

MISSING_NAME_MESSAGE = (
    "AI successfully parsed but employee name is missing in the output. "
    "Please ensure the name is clearly stated."
)


class AddEmployeeFlow(InterpretationFlow[EmployeeExtraction]):
    """Only ``name`` is mandatory; an ``Ok`` result always has ``success``."""

    schema = ADD_EMPLOYEE

    def repair(
        self, candidate: Dict[str, Any], inputs: Mapping[str, Any]
    ) -> Repaired:
        success = candidate.get("success")
        if success is True and is_blank(candidate.get("name")):
            return Failed(MISSING_NAME_MESSAGE)
        if success is False:
            message = candidate.get("message")
            if not isinstance(message, str) or is_blank(message):
                message = EMPLOYEE_NAME_REQUIRED_MESSAGE
            return Failed(message)
        if isinstance(candidate.get("name"), str):
            candidate["name"] = candidate["name"].strip()
        return candidate

    def build(self, value: Mapping[str, Any]) -> EmployeeExtraction:
        return EmployeeExtraction.from_dict(value)
