"""Whole-record validation against a declared schema.

A schema is the allow-list of fields an entity write may touch: undeclared
fields are reported under ``_unexpected`` instead of being passed through,
and every accepted field comes out of its own sanitizer.
"""

from collections.abc import Mapping
from typing import Any, Dict, List

from governance.app.core.logging import get_logger
from governance.app.validation.models import Schema, SchemaValidationOutcome

logger = get_logger(__name__)

ROOT_ERROR_KEY = "_root"
UNEXPECTED_ERROR_KEY = "_unexpected"


def validate_schema(
    data: Any,
    schema: Schema,
    reject_unexpected_fields: bool = True,
) -> SchemaValidationOutcome:
    """Validate and sanitize ``data`` field by field.

    Args:
        data: Candidate record (anything; only mappings can pass)
        schema: Field name -> SchemaField
        reject_unexpected_fields: Report keys the schema does not declare

    Returns:
        SchemaValidationOutcome. Unexpected fields make the outcome invalid
        but do not stop validation of the declared fields.
    """
    if not isinstance(data, Mapping):
        return SchemaValidationOutcome(
            is_valid=False,
            errors={ROOT_ERROR_KEY: ["Data must be an object"]},
            sanitized_data={},
        )

    errors: Dict[str, List[str]] = {}
    sanitized_data: Dict[str, Any] = {}

    if reject_unexpected_fields:
        unexpected = [str(key) for key in data if key not in schema]
        if unexpected:
            logger.info(
                f"Rejected unexpected fields: {', '.join(unexpected)}",
                extra={"field": UNEXPECTED_ERROR_KEY},
            )
            errors[UNEXPECTED_ERROR_KEY] = [f"Unexpected fields: {', '.join(unexpected)}"]

    for field_name, field_schema in schema.items():
        value = data.get(field_name)

        if field_schema.required and (value is None or value == ""):
            errors[field_name] = [f"{field_name} is required"]
            continue

        result = field_schema.validate(value)

        if not result.is_valid:
            errors[field_name] = list(result.errors)
        else:
            sanitized_data[field_name] = result.sanitized_value

    return SchemaValidationOutcome(
        is_valid=not errors,
        errors=errors,
        sanitized_data=sanitized_data,
    )
