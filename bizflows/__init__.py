"""bizflows package entry point."""

from .api import FlowSuite
from .exceptions import FlowError, ProviderUnavailableError, SchemaWiringError
from .router import AssistantOutcome, TaskRouter
from .types import (
    AppointmentSuggestion,
    Classification,
    EmployeeExtraction,
    Failed,
    InterpretationResult,
    InvoiceEmailConfirmation,
    InvoiceQuery,
    Ok,
)

__all__ = [
    "AppointmentSuggestion",
    "AssistantOutcome",
    "Classification",
    "EmployeeExtraction",
    "Failed",
    "FlowError",
    "FlowSuite",
    "InterpretationResult",
    "InvoiceEmailConfirmation",
    "InvoiceQuery",
    "Ok",
    "ProviderUnavailableError",
    "SchemaWiringError",
    "TaskRouter",
]
