"""Outcome Mapping: the single table from (operation, failure) to HTTP response.

Invariants:
    - map_failure is PURE and total: every (Operation, GatewayError) pair maps
      to exactly one FailureResponse
    - 404 only ever comes from the read path (GET /users/{id} with no match)
    - UPDATE folds every gateway failure, not-found included, into 400 "Invalid data"
    - DELETE folds every gateway failure, not-found included, into 500
    - CREATE maps ConflictError to 400, everything else to 500

Design Decisions:
    - Status codes kept deliberately coarse for compatibility with existing
      clients. Known defects: update-not-found should be 404, and delete
      not-found should not be 500. Do not "fix" one without the other
    - Body shapes: {"error": str} for failures, {"message": str} for
      not-found and delete confirmation, {"errors": [...]} for validation
"""

from dataclasses import dataclass

from user_api.core.domain_types import Operation
from user_api.core.errors import ConflictError, GatewayError


USER_NOT_FOUND = "User not found"
EMAIL_IN_USE = "Email already in use"
INVALID_DATA = "Invalid data"
GENERIC_ERROR = "An error occurred"
INTERNAL_ERROR = "Internal server error"
USER_DELETED = "User deleted successfully"


@dataclass(frozen=True)
class FailureResponse:
    """Status code and JSON body for a failed operation."""
    status_code: int
    body: dict


def map_failure(operation: Operation, error: GatewayError) -> FailureResponse:
    """Map a gateway failure to the response for the given operation."""
    match operation, error:
        case Operation.CREATE, ConflictError():
            return FailureResponse(400, {"error": EMAIL_IN_USE})
        case Operation.UPDATE, _:
            return FailureResponse(400, {"error": INVALID_DATA})
        case _:
            return FailureResponse(500, {"error": GENERIC_ERROR})


def not_found() -> FailureResponse:
    """Response for GET /users/{id} when the gateway finds nothing."""
    return FailureResponse(404, {"message": USER_NOT_FOUND})


def validation_failed(violations: list[str]) -> FailureResponse:
    """Response for a body rejected by validate_user."""
    return FailureResponse(400, {"errors": list(violations)})


def internal_error() -> FailureResponse:
    """Response for exceptions that escaped every handler."""
    return FailureResponse(500, {"error": INTERNAL_ERROR})


def deleted() -> dict:
    """Body for a successful DELETE."""
    return {"message": USER_DELETED}
