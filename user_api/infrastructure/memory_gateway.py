"""In-Memory User Gateway: process-local UserGateway for development without a database.

Invariants:
    - Writes serialized by one asyncio.Lock: the email-uniqueness check and the
      insert/replace happen atomically with respect to other writers
    - Natural order = insertion order (dict preserves it)
    - State lost on restart; single-process only

Design Decisions:
    - Same error contract as SqlAlchemyUserGateway so handlers cannot tell them apart
"""

import asyncio
import logging
import uuid

from user_api.core.domain_types import Operation, UserFields, UserId, UserRecord
from user_api.core.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class InMemoryUserGateway:
    """Persist Users in a dict keyed by id."""

    def __init__(self):
        self._users: dict[UserId, UserRecord] = {}
        self._lock = asyncio.Lock()

    async def find_all(self) -> list[UserRecord]:
        return list(self._users.values())

    async def find_by_id(self, user_id: UserId) -> UserRecord | None:
        return self._users.get(user_id)

    async def create(self, fields: UserFields) -> UserRecord:
        async with self._lock:
            if self._email_taken(fields.email):
                raise ConflictError("email", Operation.CREATE)
            user = UserRecord(id=UserId(str(uuid.uuid4())), **vars(fields))
            self._users[user.id] = user
        logger.info("User created", extra={"user_id": user.id})
        return user

    async def update(self, user_id: UserId, fields: UserFields) -> UserRecord:
        async with self._lock:
            if user_id not in self._users:
                raise NotFoundError(user_id, Operation.UPDATE)
            if self._email_taken(fields.email, exclude=user_id):
                raise ConflictError("email", Operation.UPDATE, user_id)
            user = UserRecord(id=user_id, **vars(fields))
            self._users[user_id] = user
        logger.info("User updated", extra={"user_id": user_id})
        return user

    async def delete(self, user_id: UserId) -> None:
        async with self._lock:
            if self._users.pop(user_id, None) is None:
                raise NotFoundError(user_id, Operation.DELETE)
        logger.info("User deleted", extra={"user_id": user_id})

    async def health_check(self) -> bool:
        return True

    def _email_taken(self, email: str, exclude: UserId | None = None) -> bool:
        return any(
            u.email == email and u.id != exclude for u in self._users.values()
        )
