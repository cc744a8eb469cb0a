"""Result and value dataclasses shared by the interpretation flows."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Generic, Literal, Mapping, Optional, TypeVar, Union

ValueT = TypeVar("ValueT")

TaskType = Literal["employee_management", "invoice_processing", "unknown"]
InvoiceIntent = Literal["get_details", "update_status", "unknown"]


@dataclass(frozen=True, slots=True)
class Ok(Generic[ValueT]):
    """A validated interpretation."""

    value: ValueT

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Failed:
    """An interpretation that could not be produced, with a user-facing reason."""

    reason: str

    @property
    def ok(self) -> bool:
        return False


InterpretationResult = Union[Ok[ValueT], Failed]


def _optional(payload: Mapping[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return value


@dataclass(frozen=True, slots=True)
class Classification:
    task_type: TaskType
    original_query: str
    message: str

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Classification":
        return cls(
            task_type=payload["task_type"],
            original_query=payload["original_query"],
            message=payload["message"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class EmployeeExtraction:
    success: bool
    message: str
    name: Optional[str] = None
    email: Optional[str] = None
    job_title: Optional[str] = None
    start_date: Optional[str] = None
    employment_type: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "EmployeeExtraction":
        return cls(
            success=payload["success"],
            message=payload["message"],
            name=_optional(payload, "name"),
            email=_optional(payload, "email"),
            job_title=_optional(payload, "job_title"),
            start_date=_optional(payload, "start_date"),
            employment_type=_optional(payload, "employment_type"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}


@dataclass(frozen=True, slots=True)
class InvoiceQuery:
    intent: InvoiceIntent
    message: str
    invoice_number: Optional[str] = None
    new_status: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "InvoiceQuery":
        return cls(
            intent=payload["intent"],
            message=payload["message"],
            invoice_number=_optional(payload, "invoice_number"),
            new_status=_optional(payload, "new_status"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}


@dataclass(frozen=True, slots=True)
class AppointmentSuggestion:
    suggested_times: str
    reasoning: str

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "AppointmentSuggestion":
        return cls(
            suggested_times=payload["suggested_times"],
            reasoning=payload["reasoning"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class InvoiceEmailConfirmation:
    """Outcome of a simulated invoice email; nothing is actually sent."""

    success: bool
    message: str
    email_subject: Optional[str] = None
    email_body: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "InvoiceEmailConfirmation":
        return cls(
            success=payload["success"],
            message=payload["message"],
            email_subject=_optional(payload, "email_subject"),
            email_body=_optional(payload, "email_body"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}
