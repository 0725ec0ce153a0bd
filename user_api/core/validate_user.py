"""User Validation: field-rule checks for create and update payloads.

Invariants:
    - validate_user is PURE: no IO, no persistence, no mutation of the payload
    - Every field is checked (no short-circuit); at most ONE message per field
    - Message order follows field order: name, email, age
    - Email uniqueness is NOT checked here: only the gateway sees concurrent writes

Design Decisions:
    - Rules are declared once on schemas.user.UserInput (Pydantic + email-validator);
      this module only translates ValidationError entries into fixed messages
    - Returns UserFields | list[str] instead of raising: the shell decides how a
      violation list becomes a response (api/dependencies.py)
"""

from typing import Any

from pydantic import ValidationError

from user_api.core.domain_types import AGE_MAX, AGE_MIN, UserFields
from user_api.schemas.user import UserInput


NAME_REQUIRED = "Name is required"
EMAIL_REQUIRED = "Email is required"
EMAIL_INVALID = "Invalid email address"
AGE_REQUIRED = "Age is required"
AGE_NOT_INTEGER = "Age must be an integer"
AGE_TOO_LOW = f"Age must be at least {AGE_MIN}"
AGE_TOO_HIGH = f"Age must be less than or equal to {AGE_MAX}"
BODY_NOT_OBJECT = "Request body must be a JSON object"

FIELD_ORDER = ("name", "email", "age")

_AGE_BOUNDS = {
    "greater_than_equal": AGE_TOO_LOW,
    "less_than_equal": AGE_TOO_HIGH,
}


def validate_user(payload: Any) -> UserFields | list[str]:
    """Check a candidate body against all field rules.

    Returns normalized UserFields when every rule passes, otherwise the
    ordered list of violation messages.
    """
    try:
        user = UserInput.model_validate(payload)
    except ValidationError as exc:
        return _violations(exc.errors())
    return UserFields(name=user.name, email=str(user.email), age=user.age)


def _violations(errors: list[dict[str, Any]]) -> list[str]:
    by_field: dict[str, str] = {}
    for error in errors:
        loc = error["loc"]
        # empty loc: the payload itself is not a mapping
        if not loc:
            return [BODY_NOT_OBJECT]
        by_field.setdefault(str(loc[0]), _message(str(loc[0]), error))
    return [by_field[field] for field in FIELD_ORDER if field in by_field]


def _message(field: str, error: dict[str, Any]) -> str:
    absent = error["type"] == "missing" or error.get("input") is None
    if field == "name":
        return NAME_REQUIRED
    if field == "email":
        if absent or error["type"] == "string_type" or error.get("input") == "":
            return EMAIL_REQUIRED
        return EMAIL_INVALID
    if absent:
        return AGE_REQUIRED
    return _AGE_BOUNDS.get(error["type"], AGE_NOT_INTEGER)
