"""Declarative field and shape contracts for interpretation tasks.

Each task declares an input shape (what the caller must provide) and an
output shape (what the completion oracle must return). Validation is a small
hand-written check per field kind; shapes also describe themselves as JSON
Schema so the oracle can be told exactly what to produce.
"""

from __future__ import annotations

import re

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterator, List, Literal, Mapping, Optional, Tuple

FieldKind = Literal["string", "enum", "number", "date", "email", "boolean"]

_EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

_JSON_TYPES: Dict[str, str] = {
    "string": "string",
    "enum": "string",
    "number": "number",
    "date": "string",
    "email": "string",
    "boolean": "boolean",
}


def is_email(value: str) -> bool:
    return bool(_EMAIL_RE.fullmatch(value))


def is_iso_date(value: str) -> bool:
    if not _ISO_DATE_RE.fullmatch(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_blank(value: Any) -> bool:
    """Absent for validation purposes: ``None`` or a whitespace-only string."""

    return value is None or (isinstance(value, str) and not value.strip())


@dataclass(frozen=True)
class FieldSpec:
    """One named field of a shape."""

    name: str
    kind: FieldKind = "string"
    required: bool = False
    choices: Tuple[str, ...] = field(default_factory=tuple)
    description: str = ""
    min_length: Optional[int] = None
    min_value: Optional[float] = None

    def __post_init__(self) -> None:
        if self.kind == "enum" and not self.choices:
            raise ValueError(f"Enum field '{self.name}' needs choices")

    def check(self, value: Any) -> Optional[str]:
        """Return an error message for ``value`` or ``None`` when it is valid."""

        if is_blank(value):
            return f"{self.name} is required" if self.required else None

        if self.kind == "boolean":
            if not isinstance(value, bool):
                return f"{self.name} must be true or false"
            return None

        if self.kind == "number":
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return f"{self.name} must be a number"
            if self.min_value is not None and value < self.min_value:
                return f"{self.name} must be at least {self.min_value:g}"
            return None

        if not isinstance(value, str):
            return f"{self.name} must be a string"
        if self.kind == "enum" and value not in self.choices:
            return f"{self.name} must be one of: {', '.join(self.choices)}"
        if self.kind == "email" and not is_email(value):
            return f"{self.name} must be a valid email address"
        if self.kind == "date" and not is_iso_date(value):
            return f"{self.name} must be an ISO date (YYYY-MM-DD)"
        if self.min_length is not None and len(value.strip()) < self.min_length:
            return f"{self.name} must be at least {self.min_length} characters"
        return None

    def json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": _JSON_TYPES[self.kind]}
        if self.choices:
            schema["enum"] = list(self.choices)
        if self.kind == "date":
            schema["format"] = "date"
        elif self.kind == "email":
            schema["format"] = "email"
        if self.description:
            schema["description"] = self.description
        return schema


@dataclass(frozen=True)
class Shape:
    """Ordered set of fields making up one side of a task contract."""

    fields: Tuple[FieldSpec, ...]

    def __post_init__(self) -> None:
        names = [spec.name for spec in self.fields]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate field names in shape: {names}")

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self.fields)

    def __contains__(self, name: object) -> bool:
        return name in self.field_names

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    @property
    def required_names(self) -> Tuple[str, ...]:
        return tuple(spec.name for spec in self.fields if spec.required)

    def get(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    def validate(self, payload: Mapping[str, Any]) -> List[str]:
        """Return every violation in field order (empty when valid)."""

        errors: List[str] = []
        for spec in self.fields:
            message = spec.check(payload.get(spec.name))
            if message:
                errors.append(message)
        return errors

    def project(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Keep only the keys this shape declares."""

        return {
            name: payload[name] for name in self.field_names if name in payload
        }

    def to_json_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                spec.name: spec.json_schema() for spec in self.fields
            },
            "required": list(self.required_names),
        }


@dataclass(frozen=True)
class TaskSchema:
    """Named input/output contract for one interpretation task."""

    name: str
    input: Shape
    output: Shape
    template: str
