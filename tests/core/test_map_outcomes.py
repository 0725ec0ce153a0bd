"""Outcome Mapping: tests for the (operation, failure) → response table.

Tests cover:
    - CREATE: conflict → 400, other failures → 500
    - UPDATE: every failure (not-found, conflict, generic) → 400 "Invalid data"
    - DELETE: every failure (not-found included) → 500
    - LIST / GET: gateway failures → 500; absence on GET → 404 with message body
"""

import pytest

from user_api.core.domain_types import Operation, UserId
from user_api.core.errors import ConflictError, GatewayError, NotFoundError
from user_api.core.map_outcomes import (
    EMAIL_IN_USE,
    GENERIC_ERROR,
    INTERNAL_ERROR,
    INVALID_DATA,
    USER_DELETED,
    USER_NOT_FOUND,
    FailureResponse,
    deleted,
    internal_error,
    map_failure,
    not_found,
    validation_failed,
)


def _errors(operation: Operation) -> list[GatewayError]:
    return [
        GatewayError("boom", operation),
        NotFoundError(UserId("missing"), operation),
        ConflictError("email", operation),
    ]


def test_create_conflict_maps_to_400_email_in_use():
    result = map_failure(Operation.CREATE, ConflictError("email", Operation.CREATE))
    assert result == FailureResponse(400, {"error": EMAIL_IN_USE})


def test_create_generic_failure_maps_to_500():
    result = map_failure(Operation.CREATE, GatewayError("boom", Operation.CREATE))
    assert result == FailureResponse(500, {"error": GENERIC_ERROR})


@pytest.mark.parametrize("error", _errors(Operation.UPDATE))
def test_update_failures_fold_into_400_invalid_data(error):
    assert map_failure(Operation.UPDATE, error) == FailureResponse(
        400, {"error": INVALID_DATA},
    )


@pytest.mark.parametrize("error", _errors(Operation.DELETE))
def test_delete_failures_always_500(error):
    assert map_failure(Operation.DELETE, error) == FailureResponse(
        500, {"error": GENERIC_ERROR},
    )


@pytest.mark.parametrize("operation", [Operation.LIST, Operation.GET])
def test_read_failures_map_to_500(operation):
    result = map_failure(operation, GatewayError("boom", operation))
    assert result.status_code == 500


def test_not_found_is_404_with_message_body():
    assert not_found() == FailureResponse(404, {"message": USER_NOT_FOUND})


def test_validation_failed_copies_violations():
    violations = ["Name is required"]
    result = validation_failed(violations)
    violations.append("mutated later")
    assert result == FailureResponse(400, {"errors": ["Name is required"]})


def test_internal_error_is_generic_500():
    assert internal_error() == FailureResponse(500, {"error": INTERNAL_ERROR})


def test_deleted_confirmation_body():
    assert deleted() == {"message": USER_DELETED}
