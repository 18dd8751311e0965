"""Input validation and sanitization engine.

Package layout:
- models.py: ValidationResult, SchemaField, SchemaValidationOutcome
- sanitizers.py: String / number sanitizers and HTML escaping
- validators.py: Per-field validators and their limits
- schema.py: validate_schema (mass-assignment protection)
- schemas.py: Declared entity schemas
"""

from governance.app.validation.models import (
    Schema,
    SchemaField,
    SchemaValidationOutcome,
    ValidationResult,
    Validator,
)
from governance.app.validation.sanitizers import (
    MAX_SAFE_INTEGER,
    escape_html,
    sanitize_multiline,
    sanitize_number,
    sanitize_string,
)
from governance.app.validation.schema import (
    ROOT_ERROR_KEY,
    UNEXPECTED_ERROR_KEY,
    validate_schema,
)
from governance.app.validation.schemas import SCHEMAS, get_schema, optional, partial_schema
from governance.app.validation.validators import (
    GAME_SYSTEMS,
    ITEM_STATUSES,
    LIMITS,
    validate_bio,
    validate_collection_description,
    validate_collection_name,
    validate_comment,
    validate_email,
    validate_game_system,
    validate_item_faction,
    validate_item_name,
    validate_item_notes,
    validate_item_quantity,
    validate_item_status,
    validate_location,
    validate_password,
    validate_search_query,
    validate_username,
    validate_uuid,
    validate_website_url,
)

__all__ = [
    # Models
    "ValidationResult",
    "Validator",
    "SchemaField",
    "Schema",
    "SchemaValidationOutcome",
    # Sanitizers
    "MAX_SAFE_INTEGER",
    "sanitize_string",
    "sanitize_multiline",
    "sanitize_number",
    "escape_html",
    # Field validators
    "LIMITS",
    "GAME_SYSTEMS",
    "ITEM_STATUSES",
    "validate_email",
    "validate_password",
    "validate_username",
    "validate_uuid",
    "validate_collection_name",
    "validate_collection_description",
    "validate_item_name",
    "validate_item_faction",
    "validate_item_notes",
    "validate_item_quantity",
    "validate_game_system",
    "validate_item_status",
    "validate_bio",
    "validate_location",
    "validate_website_url",
    "validate_comment",
    "validate_search_query",
    # Schemas
    "ROOT_ERROR_KEY",
    "UNEXPECTED_ERROR_KEY",
    "validate_schema",
    "SCHEMAS",
    "get_schema",
    "optional",
    "partial_schema",
]
