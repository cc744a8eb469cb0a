"""Routes a free-text request to the flow that can interpret it."""

from __future__ import annotations

import logging

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from bizflows.flows.add_employee import AddEmployeeFlow
from bizflows.flows.classify_task import ClassifyTaskFlow
from bizflows.flows.invoice_query import InvoiceQueryFlow
from bizflows.schemas.tasks import TASK_EMPLOYEE, TASK_INVOICE, TASK_UNKNOWN
from bizflows.types import Classification, Failed, InterpretationResult

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AssistantOutcome:
    """Classification plus the downstream result (``None`` when unknown)."""

    classification: Classification
    result: Optional[InterpretationResult[Any]] = None

    @property
    def message(self) -> str:
        if self.result is None:
            return self.classification.message
        if isinstance(self.result, Failed):
            return self.result.reason
        return getattr(self.result.value, "message", self.classification.message)


class TaskRouter:
    """Classifies a query, then hands the original text to the matching flow.

    The classifier's choice is final; the router does no disambiguation of
    its own.
    """

    def __init__(
        self,
        classifier: ClassifyTaskFlow,
        employee_flow: AddEmployeeFlow,
        invoice_flow: InvoiceQueryFlow,
    ) -> None:
        self._classifier = classifier
        self._employee_flow = employee_flow
        self._invoice_flow = invoice_flow

    def classify(self, text: str, *, today: Optional[date] = None) -> Classification:
        result = self._classifier.interpret({"text_query": text}, today=today)
        if isinstance(result, Failed):
            return Classification(
                task_type=TASK_UNKNOWN,
                original_query=text if isinstance(text, str) else "",
                message=result.reason,
            )
        return result.value

    def dispatch(self, text: str, *, today: Optional[date] = None) -> AssistantOutcome:
        classification = self.classify(text, today=today)
        _LOGGER.info("Routing query as %s", classification.task_type)
        if classification.task_type == TASK_EMPLOYEE:
            result = self._employee_flow.interpret(
                {"employee_text": classification.original_query}, today=today
            )
        elif classification.task_type == TASK_INVOICE:
            result = self._invoice_flow.interpret(
                {"query": classification.original_query}, today=today
            )
        else:
            return AssistantOutcome(classification=classification)
        return AssistantOutcome(classification=classification, result=result)
