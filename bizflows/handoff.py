"""Hand-off requests a host applies against its own employee/invoice stores.

Nothing here persists anything; these are the validated create/update
payloads built from ``Ok`` interpretation values.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from bizflows.types import EmployeeExtraction, InvoiceQuery


@dataclass(frozen=True, slots=True)
class EmployeeCreateRequest:
    name: str
    email: Optional[str] = None
    job_title: Optional[str] = None
    start_date: Optional[date] = None
    employment_type: Optional[str] = None


@dataclass(frozen=True, slots=True)
class InvoiceLookupRequest:
    invoice_number: str


@dataclass(frozen=True, slots=True)
class InvoiceStatusUpdateRequest:
    invoice_number: str
    new_status: str


InvoiceRequest = Union[InvoiceLookupRequest, InvoiceStatusUpdateRequest]


def employee_create_request(extraction: EmployeeExtraction) -> EmployeeCreateRequest:
    if not extraction.success or not extraction.name:
        raise ValueError("Only successful extractions with a name can be handed off")
    return EmployeeCreateRequest(
        name=extraction.name,
        email=extraction.email,
        job_title=extraction.job_title,
        start_date=date.fromisoformat(extraction.start_date)
        if extraction.start_date
        else None,
        employment_type=extraction.employment_type,
    )


def invoice_request(query: InvoiceQuery) -> Optional[InvoiceRequest]:
    """Return the store operation for ``query``, or ``None`` for unknown intents."""

    if query.intent == "get_details" and query.invoice_number:
        return InvoiceLookupRequest(invoice_number=query.invoice_number)
    if (
        query.intent == "update_status"
        and query.invoice_number
        and query.new_status
    ):
        return InvoiceStatusUpdateRequest(
            invoice_number=query.invoice_number, new_status=query.new_status
        )
    return None
