"""Invoice email confirmation flow.

Sending is simulated: no mail leaves the process. The model only drafts the
confirmation text (and optionally a subject and body for preview).
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from bizflows.flows.base import InterpretationFlow, Repaired
from bizflows.schemas.tasks import INVOICE_EMAIL
from bizflows.types import InvoiceEmailConfirmation


class InvoiceEmailFlow(InterpretationFlow[InvoiceEmailConfirmation]):
    schema = INVOICE_EMAIL

    def repair(
        self, candidate: Dict[str, Any], inputs: Mapping[str, Any]
    ) -> Repaired:
        self._logger.info(
            "Simulated invoice email: invoice_id=%s number=%s recipient=%s",
            inputs["invoice_id"],
            inputs["invoice_number"],
            inputs["recipient_email"],
        )
        return candidate

    def build(self, value: Mapping[str, Any]) -> InvoiceEmailConfirmation:
        return InvoiceEmailConfirmation.from_dict(value)
