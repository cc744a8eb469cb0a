"""Caller-facing surface: one named operation per task plus the router."""

from __future__ import annotations

import logging

from datetime import date
from typing import Any, Callable, Dict, Optional

from bizflows.configuration import FlowSettings
from bizflows.flows import (
    AddEmployeeFlow,
    AppointmentTimesFlow,
    ClassifyTaskFlow,
    InvoiceEmailFlow,
    InvoiceQueryFlow,
)
from bizflows.llm.providers import load_provider
from bizflows.logging import setup_file_logger
from bizflows.oracle import CompletionOracle, LLMCompletionOracle
from bizflows.prompting.backends.base import PromptRenderer
from bizflows.prompting.backends.jinja_backend import JinjaPromptRenderer
from bizflows.prompting.manager import PromptManager
from bizflows.router import AssistantOutcome, TaskRouter
from bizflows.types import (
    AppointmentSuggestion,
    Classification,
    EmployeeExtraction,
    InterpretationResult,
    InvoiceEmailConfirmation,
    InvoiceQuery,
)

_LOGGER = logging.getLogger(__name__)


class FlowSuite:
    """Wires one oracle and renderer into all five flows.

    Instances hold no per-request state and can serve concurrent callers.
    """

    def __init__(
        self,
        oracle: CompletionOracle,
        renderer: Optional[PromptRenderer] = None,
        *,
        clock: Callable[[], date] = date.today,
    ) -> None:
        renderer = renderer or JinjaPromptRenderer(PromptManager())
        self.classifier = ClassifyTaskFlow(oracle, renderer, clock=clock)
        self.employee = AddEmployeeFlow(oracle, renderer, clock=clock)
        self.invoice = InvoiceQueryFlow(oracle, renderer, clock=clock)
        self.appointments = AppointmentTimesFlow(oracle, renderer, clock=clock)
        self.invoice_email = InvoiceEmailFlow(oracle, renderer, clock=clock)
        self.router = TaskRouter(self.classifier, self.employee, self.invoice)

    @classmethod
    def from_settings(cls, settings: FlowSettings) -> "FlowSuite":
        if settings.logging.log_file is not None:
            setup_file_logger(
                settings.logging.log_file, level=settings.logging.level_value
            )
        provider = load_provider(settings.llm.as_provider_config())
        manager = PromptManager(
            settings.prompts.templates_dir,
            extra_dirs=settings.prompts.override_dirs,
        )
        _LOGGER.debug("Prompt search paths: %s", manager.search_paths)
        return cls(LLMCompletionOracle(provider), JinjaPromptRenderer(manager))

    def classify_task(
        self, text_query: str, *, today: Optional[date] = None
    ) -> InterpretationResult[Classification]:
        return self.classifier.interpret({"text_query": text_query}, today=today)

    def add_employee_by_text(
        self, employee_text: str, *, today: Optional[date] = None
    ) -> InterpretationResult[EmployeeExtraction]:
        return self.employee.interpret(
            {"employee_text": employee_text}, today=today
        )

    def process_invoice_query(
        self, query: str, *, today: Optional[date] = None
    ) -> InterpretationResult[InvoiceQuery]:
        return self.invoice.interpret({"query": query}, today=today)

    def suggest_appointment_times(
        self,
        *,
        historical_data: str,
        revenue_projections: str,
        appointment_duration: float,
        available_days: str,
        available_time_slots: str,
        today: Optional[date] = None,
    ) -> InterpretationResult[AppointmentSuggestion]:
        payload: Dict[str, Any] = {
            "historical_data": historical_data,
            "revenue_projections": revenue_projections,
            "appointment_duration": appointment_duration,
            "available_days": available_days,
            "available_time_slots": available_time_slots,
        }
        return self.appointments.interpret(payload, today=today)

    def send_invoice_email(
        self,
        *,
        invoice_id: str,
        recipient_email: str,
        customer_name: str,
        invoice_number: str,
        today: Optional[date] = None,
    ) -> InterpretationResult[InvoiceEmailConfirmation]:
        payload = {
            "invoice_id": invoice_id,
            "recipient_email": recipient_email,
            "customer_name": customer_name,
            "invoice_number": invoice_number,
        }
        return self.invoice_email.interpret(payload, today=today)

    def assist(self, text: str, *, today: Optional[date] = None) -> AssistantOutcome:
        return self.router.dispatch(text, today=today)
