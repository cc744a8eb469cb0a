"""Invoice intent flow: view details of, or change the status of, an invoice.

Downgrades never fail the request. A query whose intent is clear but whose
details are incomplete comes back as intent ``unknown`` with a message
telling the user exactly what to add.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from bizflows.flows.base import InterpretationFlow, Repaired
from bizflows.schemas.fields import is_blank
from bizflows.schemas.tasks import INVOICE_QUERY, INVOICE_STATUSES
from bizflows.types import InvoiceQuery

DETAILS_NUMBER_MESSAGE = (
    "Please specify the invoice number for which you want details."
)
UPDATE_NUMBER_MESSAGE = "Please specify the invoice number to update."


def invalid_status_message(invoice_number: str) -> str:
    return (
        f"Please specify a valid new status ({', '.join(INVOICE_STATUSES)}) "
        f"for invoice {invoice_number}."
    )


class InvoiceQueryFlow(InterpretationFlow[InvoiceQuery]):
    schema = INVOICE_QUERY

    def repair(
        self, candidate: Dict[str, Any], inputs: Mapping[str, Any]
    ) -> Repaired:
        status = candidate.get("new_status")
        if not is_blank(status) and status not in INVOICE_STATUSES:
            self._logger.warning("Discarding unsupported status %r", status)
            candidate.pop("new_status")

        intent = candidate.get("intent")
        number = candidate.get("invoice_number")
        if intent in ("get_details", "update_status") and is_blank(number):
            candidate.pop("new_status", None)
            return self._downgrade(
                candidate,
                DETAILS_NUMBER_MESSAGE
                if intent == "get_details"
                else UPDATE_NUMBER_MESSAGE,
            )
        if intent == "update_status" and is_blank(candidate.get("new_status")):
            return self._downgrade(candidate, invalid_status_message(number))
        return candidate

    def _downgrade(self, candidate: Dict[str, Any], message: str) -> Dict[str, Any]:
        self._logger.warning(
            "Invoice intent %r downgraded: %s", candidate.get("intent"), message
        )
        candidate["intent"] = "unknown"
        candidate["message"] = message
        return candidate

    def build(self, value: Mapping[str, Any]) -> InvoiceQuery:
        return InvoiceQuery.from_dict(value)
