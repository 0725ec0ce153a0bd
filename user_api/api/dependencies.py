"""Route Dependencies: gateway injection and body validation ahead of handlers.

Invariants:
    - get_gateway returns the single gateway built at startup (app.state.gateway)
    - require_valid_user runs BEFORE the handler body: a rejected payload raises
      UserValidationError and the handler never touches the gateway

Design Decisions:
    - UserInput is validated inside a dependency instead of bound as the route
      body: message wording and field order come from core/validate_user.py,
      not from FastAPI's 422 envelope
    - Body declared as Any so non-object JSON reaches the validator instead of
      failing schema coercion with framework-specific messages
"""

from typing import Any

from fastapi import Body, Request

from user_api.core.domain_types import UserFields
from user_api.core.errors import UserValidationError
from user_api.core.repository_protocols import UserGateway
from user_api.core.validate_user import validate_user


def get_gateway(request: Request) -> UserGateway:
    """FastAPI dependency for the persistence gateway."""
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        raise RuntimeError("User gateway not initialized")
    return gateway


def require_valid_user(
    payload: Any = Body(
        None,
        examples=[{"name": "John Doe", "email": "john.doe@example.com", "age": 30}],
    ),
) -> UserFields:
    """Parse and validate the request body into UserFields."""
    result = validate_user(payload)
    if isinstance(result, list):
        raise UserValidationError(result)
    return result
