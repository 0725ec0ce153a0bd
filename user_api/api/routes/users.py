"""User Routes: the five CRUD handlers for the User resource.

Invariants:
    - Each handler makes at most ONE gateway call and never retries
    - POST and PUT depend on require_valid_user: a rejected body returns 400
      before the handler runs, so validation and persistence failures never mix
    - Only GatewayError is caught here; its response comes from map_failure
    - {user_id} is an opaque token: no format check, a malformed id behaves
      exactly like an absent one

Design Decisions:
    - Failure responses returned as JSONResponse (bypasses response_model);
      success responses go through the Pydantic response_model
"""

import logging

from fastapi import APIRouter, Depends, status

from user_api.api.dependencies import get_gateway, require_valid_user
from user_api.api.error_handlers import to_json_response
from user_api.core.domain_types import Operation, UserFields, UserId
from user_api.core.errors import GatewayError
from user_api.core.map_outcomes import deleted, map_failure, not_found
from user_api.core.repository_protocols import UserGateway
from user_api.schemas.user import (
    ErrorResponse, MessageResponse, UserResponse, ValidationErrorResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])

_SERVER_ERROR = {status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}}
_BAD_REQUEST = {
    status.HTTP_400_BAD_REQUEST: {
        "model": ValidationErrorResponse,
        "description": "Rule violations, or {\"error\": ...} when the write is rejected",
    },
}


def _failed(operation: Operation, exc: GatewayError):
    logger.warning(
        f"{operation.value} failed: {exc.message}", extra=exc.log_extra(),
    )
    return to_json_response(map_failure(operation, exc))


@router.get("", response_model=list[UserResponse], responses=_SERVER_ERROR)
async def list_users(gateway: UserGateway = Depends(get_gateway)):
    """List all users in the gateway's natural order."""
    try:
        users = await gateway.find_all()
    except GatewayError as exc:
        return _failed(Operation.LIST, exc)
    return [UserResponse.from_record(u) for u in users]


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses={
        status.HTTP_404_NOT_FOUND: {"model": MessageResponse},
        **_SERVER_ERROR,
    },
)
async def get_user(user_id: str, gateway: UserGateway = Depends(get_gateway)):
    """Get one user by id."""
    try:
        user = await gateway.find_by_id(UserId(user_id))
    except GatewayError as exc:
        return _failed(Operation.GET, exc)
    if user is None:
        return to_json_response(not_found())
    return UserResponse.from_record(user)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_BAD_REQUEST, **_SERVER_ERROR},
)
async def create_user(
    fields: UserFields = Depends(require_valid_user),
    gateway: UserGateway = Depends(get_gateway),
):
    """Create a user; the gateway assigns the id."""
    try:
        user = await gateway.create(fields)
    except GatewayError as exc:
        return _failed(Operation.CREATE, exc)
    return UserResponse.from_record(user)


@router.put("/{user_id}", response_model=UserResponse, responses=_BAD_REQUEST)
async def update_user(
    user_id: str,
    fields: UserFields = Depends(require_valid_user),
    gateway: UserGateway = Depends(get_gateway),
):
    """Replace name, email and age of an existing user."""
    try:
        user = await gateway.update(UserId(user_id), fields)
    except GatewayError as exc:
        return _failed(Operation.UPDATE, exc)
    return UserResponse.from_record(user)


@router.delete(
    "/{user_id}", response_model=MessageResponse, responses=_SERVER_ERROR,
)
async def delete_user(user_id: str, gateway: UserGateway = Depends(get_gateway)):
    """Delete a user. Not-found is reported like any other failure (500)."""
    try:
        await gateway.delete(UserId(user_id))
    except GatewayError as exc:
        return _failed(Operation.DELETE, exc)
    return deleted()
