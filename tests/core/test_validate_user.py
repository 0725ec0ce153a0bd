"""User Validation: tests for pure field-rule checks.

Tests cover:
    - Valid payloads return normalized UserFields
    - Exactly one message per violated rule
    - Multiple violations reported in rule order (name, email, age)
    - Non-object payloads and type edge cases (bool, float, string age)
    - Email syntax delegated to email-validator: trailing newline rejected
"""

import pytest

from user_api.core.domain_types import UserFields
from user_api.core.validate_user import (
    AGE_NOT_INTEGER,
    AGE_REQUIRED,
    AGE_TOO_HIGH,
    AGE_TOO_LOW,
    BODY_NOT_OBJECT,
    EMAIL_INVALID,
    EMAIL_REQUIRED,
    NAME_REQUIRED,
    validate_user,
)


def _payload(**overrides) -> dict:
    base = {"name": "John Doe", "email": "john.doe@example.com", "age": 30}
    base.update(overrides)
    return base


# ─── Accepted payloads ───────────────────────────────────────────

def test_valid_payload_returns_user_fields():
    result = validate_user(_payload())
    assert result == UserFields(name="John Doe", email="john.doe@example.com", age=30)


@pytest.mark.parametrize("age", [18, 100, 55])
def test_age_bounds_are_inclusive(age):
    result = validate_user(_payload(age=age))
    assert isinstance(result, UserFields)
    assert result.age == age


def test_name_is_trimmed():
    result = validate_user(_payload(name="  Jane  "))
    assert result.name == "Jane"


def test_domain_case_normalized_by_email_validator():
    result = validate_user(_payload(email="john.doe@Example.COM"))
    assert result.email == "john.doe@example.com"


def test_unknown_keys_are_ignored():
    result = validate_user(_payload(id="client-chosen", role="admin"))
    assert result == UserFields(name="John Doe", email="john.doe@example.com", age=30)


def test_payload_not_mutated():
    payload = _payload(name="  Jane  ")
    validate_user(payload)
    assert payload["name"] == "  Jane  "


# ─── Single violations ───────────────────────────────────────────

@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"name": ""}, NAME_REQUIRED),
        ({"name": "   "}, NAME_REQUIRED),
        ({"name": None}, NAME_REQUIRED),
        ({"name": 42}, NAME_REQUIRED),
        ({"email": None}, EMAIL_REQUIRED),
        ({"email": ""}, EMAIL_REQUIRED),
        ({"email": "bad"}, EMAIL_INVALID),
        ({"email": "john@example"}, EMAIL_INVALID),
        ({"email": "john doe@example.com"}, EMAIL_INVALID),
        ({"email": "john@@example.com"}, EMAIL_INVALID),
        ({"email": "john@example..com"}, EMAIL_INVALID),
        ({"email": "john@example.com\n"}, EMAIL_INVALID),
        ({"email": " john@example.com"}, EMAIL_INVALID),
        ({"email": "john@example.com\njunk"}, EMAIL_INVALID),
        ({"email": 42}, EMAIL_REQUIRED),
        ({"age": None}, AGE_REQUIRED),
        ({"age": "30"}, AGE_NOT_INTEGER),
        ({"age": 30.5}, AGE_NOT_INTEGER),
        ({"age": True}, AGE_NOT_INTEGER),
        ({"age": 30.0}, AGE_NOT_INTEGER),
        ({"age": 0}, AGE_TOO_LOW),
        ({"age": 17}, AGE_TOO_LOW),
        ({"age": 101}, AGE_TOO_HIGH),
    ],
)
def test_single_rule_violation_yields_one_message(overrides, message):
    assert validate_user(_payload(**overrides)) == [message]


def test_missing_key_treated_as_absent():
    payload = _payload()
    del payload["email"]
    assert validate_user(payload) == [EMAIL_REQUIRED]


# ─── Multiple violations ─────────────────────────────────────────

def test_all_rules_violated_reports_three_messages_in_order():
    result = validate_user({"name": "", "email": "bad", "age": 10})
    assert result == [NAME_REQUIRED, EMAIL_INVALID, AGE_TOO_LOW]


def test_empty_object_reports_every_rule():
    assert validate_user({}) == [NAME_REQUIRED, EMAIL_REQUIRED, AGE_REQUIRED]


def test_order_is_fixed_regardless_of_key_order():
    result = validate_user({"age": 200, "email": "x", "name": " "})
    assert result == [NAME_REQUIRED, EMAIL_INVALID, AGE_TOO_HIGH]


# ─── Non-object payloads ─────────────────────────────────────────

@pytest.mark.parametrize("payload", [None, [], ["John"], "John", 42])
def test_non_object_payload_rejected_once(payload):
    assert validate_user(payload) == [BODY_NOT_OBJECT]


# ─── Email syntax ────────────────────────────────────────────────

def test_trailing_newline_email_rejected():
    result = validate_user(_payload(email="john@example.com\n"))
    assert result == [EMAIL_INVALID]
