"""Declared schemas for each entity the host application writes."""

import functools
from typing import Any, Dict, Iterable

from governance.app.validation.models import Schema, SchemaField, ValidationResult, Validator
from governance.app.validation.sanitizers import sanitize_string
from governance.app.validation.validators import (
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
    validate_username,
    validate_uuid,
    validate_website_url,
)


def optional(validator: Validator) -> Validator:
    """Let an otherwise mandatory-format validator accept None / ''.

    Used for fields that are optional in a partial update but must be well
    formed when given (a profile's username, a comment's parent ids).
    """

    @functools.wraps(validator)
    def wrapper(value: Any) -> ValidationResult:
        if value is None or value == "":
            return ValidationResult.ok(None)
        return validator(value)

    return wrapper


def quantity(field_name: str) -> Validator:
    """Bind a display name to validate_item_quantity."""
    return functools.partial(validate_item_quantity, field_name=field_name)


def validate_login_password(value: Any) -> ValidationResult:
    """Presence check only; sign in must not reveal the complexity rules."""
    if not isinstance(value, str) or not value:
        return ValidationResult(is_valid=False, errors=("Password is required",))
    return ValidationResult.ok(value)


def validate_storage_url(value: Any) -> ValidationResult:
    """Storage URLs are produced by the upload helper; only normalize them."""
    if value is None:
        return ValidationResult.ok(None)
    return ValidationResult.ok(sanitize_string(value) or None)


def validate_flag(value: Any) -> ValidationResult:
    return ValidationResult.ok(bool(value))


SCHEMAS: Dict[str, Schema] = {
    "sign_up": {
        "email": SchemaField(validate_email, required=True),
        "password": SchemaField(validate_password, required=True),
        "username": SchemaField(validate_username, required=True),
    },
    "sign_in": {
        "email": SchemaField(validate_email, required=True),
        "password": SchemaField(validate_login_password, required=True),
    },
    "collection": {
        "name": SchemaField(validate_collection_name, required=True),
        "description": SchemaField(validate_collection_description),
    },
    "item": {
        "name": SchemaField(validate_item_name, required=True),
        "collection_id": SchemaField(validate_uuid, required=True),
        "game_system": SchemaField(validate_game_system),
        "faction": SchemaField(validate_item_faction),
        "quantity": SchemaField(quantity("Quantity")),
        "status": SchemaField(validate_item_status),
        "nib_count": SchemaField(quantity("NIB count")),
        "assembled_count": SchemaField(quantity("Assembled count")),
        "primed_count": SchemaField(quantity("Primed count")),
        "painted_count": SchemaField(quantity("Painted count")),
        "based_count": SchemaField(quantity("Based count")),
        "notes": SchemaField(validate_item_notes),
    },
    "profile": {
        "username": SchemaField(optional(validate_username)),
        "avatar_url": SchemaField(validate_storage_url),
        "background_image_url": SchemaField(validate_storage_url),
        "is_public": SchemaField(validate_flag),
        "bio": SchemaField(validate_bio),
        "location": SchemaField(validate_location),
        "website_url": SchemaField(validate_website_url),
    },
    "comment": {
        "content": SchemaField(validate_comment, required=True),
        "item_id": SchemaField(optional(validate_uuid)),
        "collection_id": SchemaField(optional(validate_uuid)),
    },
}


def get_schema(name: str) -> Schema:
    """Look up a declared schema by entity name.

    Raises:
        KeyError: If no schema is declared under ``name``
    """
    return SCHEMAS[name]


def partial_schema(schema: Schema, fields: Iterable[str]) -> Schema:
    """Restrict ``schema`` to the declared fields among ``fields``.

    Used for partial updates: fields the caller did not send are neither
    validated nor defaulted, while sent fields keep their required flag.
    """
    wanted = set(fields)
    return {name: field for name, field in schema.items() if name in wanted}
