"""Validation data models."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Tuple


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating one value.

    ``sanitized_value`` is the value safe to persist; it is still computed
    for some failures (e.g. a clamped number) and is None when nothing
    usable could be derived.
    """
    is_valid: bool
    errors: Tuple[str, ...] = ()
    sanitized_value: Any = None

    @classmethod
    def ok(cls, sanitized_value: Any) -> "ValidationResult":
        return cls(is_valid=True, errors=(), sanitized_value=sanitized_value)

    @classmethod
    def from_errors(cls, errors: List[str], sanitized_value: Any = None) -> "ValidationResult":
        return cls(
            is_valid=not errors,
            errors=tuple(errors),
            sanitized_value=sanitized_value,
        )

    @property
    def first_error(self) -> str | None:
        return self.errors[0] if self.errors else None


Validator = Callable[[Any], ValidationResult]


@dataclass(frozen=True)
class SchemaField:
    """One declared field of an entity schema."""
    validate: Validator
    required: bool = False


Schema = Mapping[str, SchemaField]


@dataclass(frozen=True)
class SchemaValidationOutcome:
    """Result of validating a whole record against a schema.

    Attributes:
        is_valid: True iff no field produced errors
        errors: Field name -> messages; '_root' for non-object input and
            '_unexpected' for fields the schema does not declare
        sanitized_data: Accepted fields with their sanitized values
    """
    is_valid: bool
    errors: Dict[str, List[str]] = field(default_factory=dict)
    sanitized_data: Dict[str, Any] = field(default_factory=dict)

    @property
    def first_error(self) -> str | None:
        for messages in self.errors.values():
            if messages:
                return messages[0]
        return None
