"""Per-field validators.

Every validator accepts any value and returns a ValidationResult; none of
them raise. Optional fields treat None and '' as valid with a None
sanitized value.
"""

import re
from typing import Any, Optional
from urllib.parse import urlsplit

from governance.app.validation.models import ValidationResult
from governance.app.validation.sanitizers import (
    sanitize_multiline,
    sanitize_number,
    sanitize_string,
)


class LIMITS:
    """Length and magnitude limits per field."""

    # Authentication
    EMAIL_MAX_LENGTH = 254  # RFC 5321
    PASSWORD_MIN_LENGTH = 8
    PASSWORD_MAX_LENGTH = 128  # keeps hashing cost bounded
    USERNAME_MIN_LENGTH = 3
    USERNAME_MAX_LENGTH = 30

    # Collections
    COLLECTION_NAME_MAX_LENGTH = 100
    COLLECTION_DESCRIPTION_MAX_LENGTH = 500

    # Items
    ITEM_NAME_MAX_LENGTH = 200
    ITEM_FACTION_MAX_LENGTH = 100
    ITEM_NOTES_MAX_LENGTH = 2000
    ITEM_QUANTITY_MAX = 10_000

    # Social
    BIO_MAX_LENGTH = 150
    LOCATION_MAX_LENGTH = 100
    WEBSITE_URL_MAX_LENGTH = 200
    COMMENT_MIN_LENGTH = 1
    COMMENT_MAX_LENGTH = 1000

    MAX_SEARCH_QUERY_LENGTH = 100


EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)
USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")
UUID_V4_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$"
)
SAFE_TEXT_PATTERN = re.compile(r"^[^\x00-\x08\x0b\x0c\x0e-\x1f\x7f]*$")

# A leading "scheme:" not followed by a digit (so "host:8080" is a host)
_EXPLICIT_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:(?!\d)")
_INVALID_HOST_CHARS = re.compile(r"[\s<>\"{}|\\^`]")

GAME_SYSTEMS = ("wh40k", "aos", "legion", "other")
DEFAULT_GAME_SYSTEM = "other"
ITEM_STATUSES = ("nib", "assembled", "primed", "painted", "based")
DEFAULT_ITEM_STATUS = "nib"


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def validate_email(email: Any) -> ValidationResult:
    if not isinstance(email, str):
        return ValidationResult(is_valid=False, errors=("Email must be a string",))

    sanitized = sanitize_string(email).lower()
    errors = []

    if not sanitized:
        errors.append("Email is required")
    else:
        if len(sanitized) > LIMITS.EMAIL_MAX_LENGTH:
            errors.append(f"Email must be less than {LIMITS.EMAIL_MAX_LENGTH} characters")
        if not EMAIL_PATTERN.match(sanitized):
            errors.append("Please enter a valid email address")

    return ValidationResult.from_errors(errors, sanitized)


def validate_password(password: Any) -> ValidationResult:
    """Check password complexity.

    The value is never sanitized: whitespace and special characters are part
    of the secret. Every violated rule is reported.
    """
    if not isinstance(password, str):
        return ValidationResult(is_valid=False, errors=("Password must be a string",))

    errors = []

    if not password:
        errors.append("Password is required")
    else:
        if len(password) < LIMITS.PASSWORD_MIN_LENGTH:
            errors.append(f"Password must be at least {LIMITS.PASSWORD_MIN_LENGTH} characters")
        if len(password) > LIMITS.PASSWORD_MAX_LENGTH:
            errors.append(f"Password must be less than {LIMITS.PASSWORD_MAX_LENGTH} characters")
        if not re.search(r"[a-zA-Z]", password):
            errors.append("Password must contain at least one letter")
        if not re.search(r"[0-9]", password):
            errors.append("Password must contain at least one number")

    return ValidationResult.from_errors(errors, password)


def validate_username(username: Any) -> ValidationResult:
    if not isinstance(username, str):
        return ValidationResult(is_valid=False, errors=("Username must be a string",))

    sanitized = sanitize_string(username)
    errors = []

    if not sanitized:
        errors.append("Username is required")
    elif len(sanitized) < LIMITS.USERNAME_MIN_LENGTH:
        errors.append(f"Username must be at least {LIMITS.USERNAME_MIN_LENGTH} characters")
    elif len(sanitized) > LIMITS.USERNAME_MAX_LENGTH:
        errors.append(f"Username must be less than {LIMITS.USERNAME_MAX_LENGTH} characters")
    elif not USERNAME_PATTERN.match(sanitized):
        errors.append("Username can only contain letters, numbers, underscores, and hyphens")

    return ValidationResult.from_errors(errors, sanitized)


def validate_uuid(value: Any) -> ValidationResult:
    """Accept only UUID v4 ids (version 4, RFC 4122 variant)."""
    if not isinstance(value, str):
        return ValidationResult(is_valid=False, errors=("ID must be a string",))

    sanitized = sanitize_string(value).lower()
    errors = []

    if not sanitized:
        errors.append("ID is required")
    elif not UUID_V4_PATTERN.match(sanitized):
        errors.append("Invalid ID format")

    return ValidationResult.from_errors(errors, sanitized)


def _validate_required_text(value: Any, label: str, max_length: int) -> ValidationResult:
    if not isinstance(value, str):
        return ValidationResult(is_valid=False, errors=(f"{label} must be a string",))

    sanitized = sanitize_string(value)
    errors = []

    if not sanitized:
        errors.append(f"{label} is required")
    elif len(sanitized) > max_length:
        errors.append(f"{label} must be less than {max_length} characters")
    elif not SAFE_TEXT_PATTERN.match(sanitized):
        errors.append(f"{label} contains invalid characters")

    return ValidationResult.from_errors(errors, sanitized)


def _validate_optional_text(value: Any, label: str, max_length: int) -> ValidationResult:
    if _is_empty(value):
        return ValidationResult.ok(None)
    if not isinstance(value, str):
        return ValidationResult(is_valid=False, errors=(f"{label} must be a string",))

    sanitized = sanitize_string(value)
    errors = []

    if len(sanitized) > max_length:
        errors.append(f"{label} must be less than {max_length} characters")
    elif not SAFE_TEXT_PATTERN.match(sanitized):
        errors.append(f"{label} contains invalid characters")

    return ValidationResult.from_errors(errors, sanitized or None)


def _validate_optional_multiline(value: Any, label: str, max_length: int) -> ValidationResult:
    if _is_empty(value):
        return ValidationResult.ok(None)
    if not isinstance(value, str):
        return ValidationResult(is_valid=False, errors=(f"{label} must be a string",))

    sanitized = sanitize_multiline(value)
    errors = []

    if len(sanitized) > max_length:
        errors.append(f"{label} must be less than {max_length} characters")

    return ValidationResult.from_errors(errors, sanitized or None)


def _validate_choice(value: Any, label: str, choices: tuple, default: str) -> ValidationResult:
    if _is_empty(value):
        return ValidationResult.ok(default)
    if not isinstance(value, str):
        return ValidationResult(is_valid=False, errors=(f"{label} must be a string",))

    sanitized = sanitize_string(value).lower()
    if sanitized not in choices:
        return ValidationResult(
            is_valid=False,
            errors=(f"Invalid {label.lower()}. Must be one of: {', '.join(choices)}",),
        )

    return ValidationResult.ok(sanitized)


def validate_collection_name(name: Any) -> ValidationResult:
    return _validate_required_text(name, "Collection name", LIMITS.COLLECTION_NAME_MAX_LENGTH)


def validate_collection_description(description: Any) -> ValidationResult:
    return _validate_optional_text(
        description, "Description", LIMITS.COLLECTION_DESCRIPTION_MAX_LENGTH
    )


def validate_item_name(name: Any) -> ValidationResult:
    return _validate_required_text(name, "Item name", LIMITS.ITEM_NAME_MAX_LENGTH)


def validate_item_faction(faction: Any) -> ValidationResult:
    return _validate_optional_text(faction, "Faction", LIMITS.ITEM_FACTION_MAX_LENGTH)


def validate_item_notes(notes: Any) -> ValidationResult:
    return _validate_optional_multiline(notes, "Notes", LIMITS.ITEM_NOTES_MAX_LENGTH)


def validate_item_quantity(quantity: Any, field_name: str = "Quantity") -> ValidationResult:
    """Clamp a count into ``[0, ITEM_QUANTITY_MAX]``.

    Out-of-range numbers are clamped, not rejected. Non-numeric input is an
    error, but the result still carries the safest value (0) so a caller can
    show the message and keep a usable number.
    """
    number = sanitize_number(quantity, 0, LIMITS.ITEM_QUANTITY_MAX)
    errors = []

    if number is None and not _is_empty(quantity):
        errors.append(f"{field_name} must be a valid number")

    return ValidationResult.from_errors(errors, number if number is not None else 0)


def validate_game_system(system: Any) -> ValidationResult:
    return _validate_choice(system, "Game system", GAME_SYSTEMS, DEFAULT_GAME_SYSTEM)


def validate_item_status(status: Any) -> ValidationResult:
    return _validate_choice(status, "Status", ITEM_STATUSES, DEFAULT_ITEM_STATUS)


def validate_search_query(query: Any) -> ValidationResult:
    if _is_empty(query):
        return ValidationResult.ok("")
    if not isinstance(query, str):
        return ValidationResult(is_valid=False, errors=("Search query must be a string",))

    sanitized = sanitize_string(query)
    errors = []

    if len(sanitized) > LIMITS.MAX_SEARCH_QUERY_LENGTH:
        errors.append(
            f"Search query must be less than {LIMITS.MAX_SEARCH_QUERY_LENGTH} characters"
        )

    return ValidationResult.from_errors(errors, sanitized)


def validate_bio(bio: Any) -> ValidationResult:
    return _validate_optional_multiline(bio, "Bio", LIMITS.BIO_MAX_LENGTH)


def validate_location(location: Any) -> ValidationResult:
    return _validate_optional_text(location, "Location", LIMITS.LOCATION_MAX_LENGTH)


def _website_url_error(text: str) -> Optional[str]:
    candidate = text if _EXPLICIT_SCHEME.match(text) else f"https://{text}"
    try:
        parts = urlsplit(candidate)
        parts.port  # raises ValueError for a malformed port
    except ValueError:
        return "Please enter a valid website URL"
    if parts.scheme.lower() not in ("http", "https"):
        return "Website URL must use http or https"
    host = parts.hostname
    if not host or _INVALID_HOST_CHARS.search(host):
        return "Please enter a valid website URL"
    return None


def validate_website_url(url: Any) -> ValidationResult:
    """Validate a website link, with or without an explicit scheme.

    A bare host is parsed as https; only http and https are accepted. The
    stored value is the sanitized input as typed.
    """
    if _is_empty(url):
        return ValidationResult.ok(None)
    if not isinstance(url, str):
        return ValidationResult(is_valid=False, errors=("Website URL must be a string",))

    sanitized = sanitize_string(url)
    errors = []

    if len(sanitized) > LIMITS.WEBSITE_URL_MAX_LENGTH:
        errors.append(
            f"Website URL must be less than {LIMITS.WEBSITE_URL_MAX_LENGTH} characters"
        )
    else:
        url_error = _website_url_error(sanitized)
        if url_error:
            errors.append(url_error)

    return ValidationResult.from_errors(errors, sanitized or None)


def validate_comment(content: Any) -> ValidationResult:
    if not isinstance(content, str):
        return ValidationResult(is_valid=False, errors=("Comment must be a string",))

    sanitized = sanitize_multiline(content)
    errors = []

    if len(sanitized) < LIMITS.COMMENT_MIN_LENGTH:
        errors.append("Comment cannot be empty")
    elif len(sanitized) > LIMITS.COMMENT_MAX_LENGTH:
        errors.append(f"Comment must be less than {LIMITS.COMMENT_MAX_LENGTH} characters")

    return ValidationResult.from_errors(errors, sanitized)
