"""Schema contracts for interpretation tasks."""

from bizflows.schemas.fields import FieldSpec, Shape, TaskSchema
from bizflows.schemas.tasks import (
    ADD_EMPLOYEE,
    APPOINTMENT_TIMES,
    CLASSIFY_TASK,
    EMPLOYMENT_TYPES,
    INVOICE_EMAIL,
    INVOICE_INTENTS,
    INVOICE_QUERY,
    INVOICE_STATUSES,
    TASK_SCHEMAS,
    TASK_TYPES,
)

__all__ = [
    "ADD_EMPLOYEE",
    "APPOINTMENT_TIMES",
    "CLASSIFY_TASK",
    "EMPLOYMENT_TYPES",
    "FieldSpec",
    "INVOICE_EMAIL",
    "INVOICE_INTENTS",
    "INVOICE_QUERY",
    "INVOICE_STATUSES",
    "Shape",
    "TASK_SCHEMAS",
    "TASK_TYPES",
    "TaskSchema",
]
