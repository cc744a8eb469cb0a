"""Default prompt fill definitions: worked examples and task constants."""

from __future__ import annotations

import json

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping

from bizflows.prompting.fills.registry import (
    PromptFillContext,
    PromptFillRegistry,
)
from bizflows.schemas.tasks import (
    EMPLOYMENT_TYPES,
    INVOICE_STATUSES,
    TASK_TYPES,
)

# Keys every fill may contribute; templates may reference these in addition
# to their task's input fields.
FILL_KEYS = frozenset(
    {
        "current_date",
        "examples",
        "employment_types",
        "invoice_statuses",
        "task_types",
    }
)


@dataclass(frozen=True)
class PromptExample:
    """A worked example steering the model: input text and expected output."""

    query: str
    output: Mapping[str, Any]

    def output_json(self) -> str:
        return json.dumps(dict(self.output), ensure_ascii=False)


_STATUS_LIST = ", ".join(INVOICE_STATUSES)

TASK_EXAMPLES: Dict[str, List[PromptExample]] = {
    "classify_task": [
        PromptExample(
            "Add new team member Jane Doe, email jane.d@example.com",
            {
                "task_type": "employee_management",
                "original_query": "Add new team member Jane Doe, email jane.d@example.com",
                "message": "Query classified as employee management.",
            },
        ),
        PromptExample(
            "Show me invoice INV-2024-0042",
            {
                "task_type": "invoice_processing",
                "original_query": "Show me invoice INV-2024-0042",
                "message": "Query classified as invoice processing.",
            },
        ),
        PromptExample(
            "What's the weather like?",
            {
                "task_type": "unknown",
                "original_query": "What's the weather like?",
                "message": "Query could not be classified as employee or invoice related.",
            },
        ),
    ],
    "add_employee": [
        PromptExample(
            "Add new team member Jane Doe, email is jane.d@example.com, "
            "position Senior Developer, starts next Monday (current date "
            "2024-07-15), contract based.",
            {
                "success": True,
                "message": "Employee details extracted.",
                "name": "Jane Doe",
                "email": "jane.d@example.com",
                "job_title": "Senior Developer",
                "start_date": "2024-07-22",
                "employment_type": "Contract",
            },
        ),
        PromptExample(
            "John Smith, john@test.com",
            {
                "success": True,
                "message": (
                    "Employee details extracted. Job title, start date, and "
                    "employment type are optional."
                ),
                "name": "John Smith",
                "email": "john@test.com",
            },
        ),
        PromptExample(
            "Employee: Sarah, title Manager",
            {
                "success": True,
                "message": "Employee details extracted.",
                "name": "Sarah",
                "job_title": "Manager",
            },
        ),
        PromptExample(
            "Need to add someone.",
            {
                "success": False,
                "message": "Employee name is required. Please provide more details.",
            },
        ),
    ],
    "invoice_query": [
        PromptExample(
            "Show me invoice INV-2024-0042",
            {
                "intent": "get_details",
                "invoice_number": "INV-2024-0042",
                "message": "Getting details for invoice INV-2024-0042.",
            },
        ),
        PromptExample(
            "Change status of INV-2023-001 to Paid",
            {
                "intent": "update_status",
                "invoice_number": "INV-2023-001",
                "new_status": "Paid",
                "message": "Attempting to update invoice INV-2023-001 to Paid.",
            },
        ),
        PromptExample(
            "Set INV-007 to Overdue",
            {
                "intent": "update_status",
                "invoice_number": "INV-007",
                "new_status": "Overdue",
                "message": "Attempting to update invoice INV-007 to Overdue.",
            },
        ),
        PromptExample(
            "What's up?",
            {
                "intent": "unknown",
                "message": (
                    "Sorry, I didn't understand that. You can ask to 'show "
                    "details for INV-XXXX' or 'update status of INV-XXXX to "
                    "Paid/Sent/Draft/Overdue'."
                ),
            },
        ),
        PromptExample(
            "Update status to Paid",
            {
                "intent": "update_status",
                "message": "Please specify the invoice number.",
            },
        ),
        PromptExample(
            "Mark INV-111 as shipped",
            {
                "intent": "update_status",
                "invoice_number": "INV-111",
                "message": (
                    f"Please specify a valid status ({_STATUS_LIST}) for the "
                    "invoice."
                ),
            },
        ),
    ],
}


def register_task_examples(task: str, examples: Iterable[PromptExample]) -> None:
    """Extend the worked examples rendered for ``task``.

    Examples live in the process-wide ``TASK_EXAMPLES`` table, so call this
    once at startup before any flow renders. Examples with an empty query
    are ignored.
    """

    values = [example for example in examples if example.query]
    if not values:
        return
    TASK_EXAMPLES.setdefault(task, []).extend(values)


def _current_date_fill(ctx: PromptFillContext) -> dict[str, object]:
    return {"current_date": ctx.current_date.isoformat()}


def _examples_fill(ctx: PromptFillContext) -> dict[str, object]:
    return {"examples": list(TASK_EXAMPLES.get(ctx.task.name, []))}


def _constants_fill(ctx: PromptFillContext) -> dict[str, object]:
    return {
        "employment_types": ", ".join(EMPLOYMENT_TYPES),
        "invoice_statuses": _STATUS_LIST,
        "task_types": ", ".join(TASK_TYPES),
    }


def register_default_fills(registry: PromptFillRegistry) -> None:
    registry.register(_current_date_fill)
    registry.register(_examples_fill)
    registry.register(_constants_fill)
