"""Contracts for the five interpretation tasks."""

from __future__ import annotations

from typing import Dict

from bizflows.schemas.fields import FieldSpec, Shape, TaskSchema

# Keep in sync with the HR employee form.
EMPLOYMENT_TYPES = ("Full-time", "Part-time", "Contract")
INVOICE_STATUSES = ("Draft", "Sent", "Paid", "Overdue")
INVOICE_INTENTS = ("get_details", "update_status", "unknown")

TASK_EMPLOYEE = "employee_management"
TASK_INVOICE = "invoice_processing"
TASK_UNKNOWN = "unknown"
TASK_TYPES = (TASK_EMPLOYEE, TASK_INVOICE, TASK_UNKNOWN)

CLASSIFY_TASK = TaskSchema(
    name="classify_task",
    template="classify_task.j2",
    input=Shape(
        (
            FieldSpec(
                "text_query",
                required=True,
                description="The user's natural language query.",
            ),
        )
    ),
    output=Shape(
        (
            FieldSpec(
                "task_type",
                kind="enum",
                required=True,
                choices=TASK_TYPES,
                description="The type of task the user's query is related to.",
            ),
            FieldSpec(
                "original_query",
                required=True,
                description="The original user query, passed through unchanged.",
            ),
            FieldSpec(
                "message",
                required=True,
                description="A message about the classification, e.g. if unknown.",
            ),
        )
    ),
)

ADD_EMPLOYEE = TaskSchema(
    name="add_employee",
    template="add_employee.j2",
    input=Shape(
        (
            FieldSpec(
                "employee_text",
                required=True,
                description=(
                    "Natural language text describing the employee to add: "
                    "name, email, job title, start date and employment type."
                ),
            ),
        )
    ),
    output=Shape(
        (
            FieldSpec(
                "success",
                kind="boolean",
                required=True,
                description=(
                    "Whether parsing succeeded and all required fields are "
                    "present."
                ),
            ),
            FieldSpec(
                "message",
                required=True,
                description="Outcome message or a request for clarification.",
            ),
            FieldSpec("name", description="Full name of the employee."),
            FieldSpec(
                "email",
                kind="email",
                description="Email address of the employee.",
            ),
            FieldSpec("job_title", description="Job title of the employee."),
            FieldSpec(
                "start_date",
                kind="date",
                description="Start date in YYYY-MM-DD format.",
            ),
            FieldSpec(
                "employment_type",
                kind="enum",
                choices=EMPLOYMENT_TYPES,
                description="Employment type.",
            ),
        )
    ),
)

INVOICE_QUERY = TaskSchema(
    name="invoice_query",
    template="invoice_query.j2",
    input=Shape(
        (
            FieldSpec(
                "query",
                required=True,
                description=(
                    "Natural language query about an invoice, e.g. "
                    "'Show details for INV-2024-0001'."
                ),
            ),
        )
    ),
    output=Shape(
        (
            FieldSpec(
                "intent",
                kind="enum",
                required=True,
                choices=INVOICE_INTENTS,
                description="The recognized intent of the query.",
            ),
            FieldSpec(
                "invoice_number",
                description="Invoice number, e.g. 'INV-2024-0001'.",
            ),
            FieldSpec(
                "new_status",
                kind="enum",
                choices=INVOICE_STATUSES,
                description="New status for an update_status intent.",
            ),
            FieldSpec(
                "message",
                required=True,
                description="Summary of the action or a request for clarification.",
            ),
        )
    ),
)

APPOINTMENT_TIMES = TaskSchema(
    name="appointment_times",
    template="appointment_times.j2",
    input=Shape(
        (
            FieldSpec(
                "historical_data",
                required=True,
                min_length=10,
                description=(
                    "Historical appointment data: date, time, duration and "
                    "revenue generated."
                ),
            ),
            FieldSpec(
                "revenue_projections",
                required=True,
                min_length=10,
                description="Revenue projections for the coming weeks or months.",
            ),
            FieldSpec(
                "appointment_duration",
                kind="number",
                required=True,
                min_value=15,
                description="Duration of the appointment in minutes.",
            ),
            FieldSpec(
                "available_days",
                required=True,
                min_length=3,
                description="Days of the week appointments can be scheduled on.",
            ),
            FieldSpec(
                "available_time_slots",
                required=True,
                min_length=3,
                description="Time slots available for appointments.",
            ),
        )
    ),
    output=Shape(
        (
            FieldSpec(
                "suggested_times",
                required=True,
                description="Suggested optimal appointment times.",
            ),
            FieldSpec(
                "reasoning",
                required=True,
                description="Why the suggested times are optimal.",
            ),
        )
    ),
)

INVOICE_EMAIL = TaskSchema(
    name="invoice_email",
    template="invoice_email.j2",
    input=Shape(
        (
            FieldSpec(
                "invoice_id",
                required=True,
                description="ID of the invoice to send.",
            ),
            FieldSpec(
                "recipient_email",
                kind="email",
                required=True,
                description="Email address of the recipient.",
            ),
            FieldSpec(
                "customer_name",
                required=True,
                description="Name of the customer receiving the invoice.",
            ),
            FieldSpec(
                "invoice_number",
                required=True,
                description="The invoice number.",
            ),
        )
    ),
    output=Shape(
        (
            FieldSpec(
                "success",
                kind="boolean",
                required=True,
                description="Whether the simulated send succeeded.",
            ),
            FieldSpec(
                "message",
                required=True,
                description="Outcome of the simulated send.",
            ),
            FieldSpec("email_subject", description="Subject line of the email."),
            FieldSpec("email_body", description="Body text of the email."),
        )
    ),
)

TASK_SCHEMAS: Dict[str, TaskSchema] = {
    schema.name: schema
    for schema in (
        CLASSIFY_TASK,
        ADD_EMPLOYEE,
        INVOICE_QUERY,
        APPOINTMENT_TIMES,
        INVOICE_EMAIL,
    )
}
