"""Values the flows supply when the model omits a field.

Every default lives in ``OMISSION_DEFAULTS``, keyed by task name then field.
A default is either a constant or a callable ``(candidate, inputs) -> value``.
A field counts as omitted when it is missing, ``None`` or a blank string.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Union

from bizflows.schemas.fields import is_blank
from bizflows.schemas.tasks import INVOICE_STATUSES, TASK_UNKNOWN

Default = Union[Any, Callable[[Mapping[str, Any], Mapping[str, Any]], Any]]

UNKNOWN_QUERY_MESSAGE = (
    "Query could not be classified. I can help with employees (e.g. 'Add "
    "Jane Doe, jane@example.com, starts Monday') or invoices (e.g. 'Show "
    "invoice INV-2024-0001' or 'Mark INV-2024-0001 as Paid')."
)
CLASSIFIED_MESSAGE = "Query classified."
EMPLOYEE_EXTRACTED_MESSAGE = "Employee details extracted."
EMPLOYEE_NAME_REQUIRED_MESSAGE = (
    "Employee name is required. Please provide more details."
)
UNKNOWN_INVOICE_MESSAGE = (
    "Sorry, I didn't understand that. You can ask to 'show details for "
    "INV-XXXX' or 'update status of INV-XXXX to "
    f"{'/'.join(INVOICE_STATUSES)}'."
)


def _classification_message(
    candidate: Mapping[str, Any], inputs: Mapping[str, Any]
) -> str:
    if candidate.get("task_type") == TASK_UNKNOWN:
        return UNKNOWN_QUERY_MESSAGE
    return CLASSIFIED_MESSAGE


def _employee_message(
    candidate: Mapping[str, Any], inputs: Mapping[str, Any]
) -> str:
    if candidate.get("success") is True:
        return EMPLOYEE_EXTRACTED_MESSAGE
    return EMPLOYEE_NAME_REQUIRED_MESSAGE


def _invoice_message(
    candidate: Mapping[str, Any], inputs: Mapping[str, Any]
) -> str:
    intent = candidate.get("intent")
    number = candidate.get("invoice_number")
    if intent == "get_details" and number:
        return f"Getting details for invoice {number}."
    if intent == "update_status" and number:
        status = candidate.get("new_status")
        return f"Attempting to update invoice {number} to {status}."
    return UNKNOWN_INVOICE_MESSAGE


def _email_message(
    candidate: Mapping[str, Any], inputs: Mapping[str, Any]
) -> str:
    return (
        f"Successfully simulated sending invoice {inputs['invoice_number']} "
        f"to {inputs['recipient_email']}."
    )


OMISSION_DEFAULTS: Dict[str, Dict[str, Default]] = {
    "classify_task": {"message": _classification_message},
    "add_employee": {"message": _employee_message},
    "invoice_query": {"message": _invoice_message},
    "appointment_times": {},
    # Sending is simulated, so there is no failure to report by default.
    "invoice_email": {"success": True, "message": _email_message},
}


def apply_defaults(
    task: str, candidate: Mapping[str, Any], inputs: Mapping[str, Any]
) -> Dict[str, Any]:
    """Return a copy of ``candidate`` with omitted fields defaulted."""

    filled = dict(candidate)
    for field_name, default in OMISSION_DEFAULTS.get(task, {}).items():
        if not is_blank(filled.get(field_name)):
            continue
        filled[field_name] = (
            default(filled, inputs) if callable(default) else default
        )
    return filled
