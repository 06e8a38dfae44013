"""
Validation utilities for request input.

All helpers raise ValidationError (HTTP 400) and return the normalized value.
"""
import re
from typing import Any

from ..models.user import USER_TYPE_JOB_SEEKER, USER_TYPES
from .error_handlers import ValidationError, get_error_message

MAX_ROW_ID = 2**63 - 1

EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
PHONE_PATTERN = r'^\+?[0-9 ()\-.]{5,50}$'


def validate_email(email: str) -> str:
    """Validate email format."""
    if not email or not isinstance(email, str):
        raise ValidationError("Email is required")

    email = email.strip().lower()
    if len(email) > 255:
        raise ValidationError("Email too long (max 255 characters)")

    if not re.match(EMAIL_PATTERN, email):
        raise ValidationError("Invalid email format")

    return email


def validate_password(password: str) -> None:
    """Validate password strength."""
    if not password or not isinstance(password, str):
        raise ValidationError("Password is required")

    if len(password) < 6:
        raise ValidationError(get_error_message("weak_password"))

    if len(password.encode("utf-8")) > 72:
        raise ValidationError("Password too long (max 72 bytes)")


def validate_string_field(
    value: Any,
    field_name: str,
    min_length: int = 1,
    max_length: int = 1000,
    required: bool = True,
    pattern: str | None = None,
) -> str | None:
    """Validate a string field with common rules."""
    if value is None:
        if required:
            raise ValidationError(f"{field_name} is required")
        return None

    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")

    value = value.strip()

    if not value:
        if required:
            raise ValidationError(f"{field_name} cannot be empty")
        return None

    if len(value) < min_length:
        raise ValidationError(f"{field_name} must be at least {min_length} characters")

    if len(value) > max_length:
        raise ValidationError(f"{field_name} must not exceed {max_length} characters")

    if pattern and not re.match(pattern, value):
        raise ValidationError(f"{field_name} format is invalid")

    return value


def validate_integer_field(
    value: Any,
    field_name: str,
    min_value: int | None = None,
    max_value: int | None = None,
    required: bool = True,
) -> int | None:
    """Validate an integer field. Numeric strings are accepted and converted."""
    if value is None or value == "":
        if required:
            raise ValidationError(f"{field_name} is required")
        return None

    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a valid integer")

    if not isinstance(value, int):
        try:
            value = int(str(value).strip())
        except (ValueError, TypeError):
            raise ValidationError(f"{field_name} must be a valid integer")

    if min_value is not None and value < min_value:
        raise ValidationError(f"{field_name} must be at least {min_value}")

    if max_value is not None and value > max_value:
        raise ValidationError(f"{field_name} must not exceed {max_value}")

    return value


def validate_job_id(value: Any) -> int:
    return validate_integer_field(value, "Job ID", min_value=1, max_value=MAX_ROW_ID)


def validate_phone(phone: str | None) -> str | None:
    return validate_string_field(phone, "Phone", required=False, max_length=50, pattern=PHONE_PATTERN)


def validate_user_type(user_type: Any) -> int:
    """Validate user type, defaulting to job seeker when absent."""
    if user_type is None or user_type == "":
        return USER_TYPE_JOB_SEEKER

    user_type = validate_integer_field(user_type, "User type")
    if user_type not in USER_TYPES:
        raise ValidationError(
            f"Invalid user type. Must be one of: {', '.join(str(t) for t in sorted(USER_TYPES))}"
        )

    return user_type
