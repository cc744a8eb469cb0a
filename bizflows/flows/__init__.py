"""Interpretation flows, one per task."""

from bizflows.flows.add_employee import AddEmployeeFlow
from bizflows.flows.appointment_times import AppointmentTimesFlow
from bizflows.flows.base import NO_OUTPUT_MESSAGE, InterpretationFlow
from bizflows.flows.classify_task import ClassifyTaskFlow
from bizflows.flows.defaults import OMISSION_DEFAULTS, apply_defaults
from bizflows.flows.invoice_email import InvoiceEmailFlow
from bizflows.flows.invoice_query import InvoiceQueryFlow

FLOW_CLASSES = {
    flow_cls.schema.name: flow_cls
    for flow_cls in (
        ClassifyTaskFlow,
        AddEmployeeFlow,
        InvoiceQueryFlow,
        AppointmentTimesFlow,
        InvoiceEmailFlow,
    )
}

__all__ = [
    "AddEmployeeFlow",
    "AppointmentTimesFlow",
    "ClassifyTaskFlow",
    "FLOW_CLASSES",
    "InterpretationFlow",
    "InvoiceEmailFlow",
    "InvoiceQueryFlow",
    "NO_OUTPUT_MESSAGE",
    "OMISSION_DEFAULTS",
    "apply_defaults",
]
