# clientauth/domain/models/field_error.py

from dataclasses import dataclass
from typing import Any

REQUIRED = "FieldValueRequired"
INVALID = "FieldValueInvalid"
DUPLICATE = "FieldValueDuplicate"
IMMUTABLE = "FieldValueImmutable"


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation failure."""
    type: str
    field: str
    value: Any = None
    detail: str = ""

    def __str__(self) -> str:
        message = f"{self.field}: {self.type}"
        if self.detail:
            message = f"{message} ({self.detail})"
        return message
