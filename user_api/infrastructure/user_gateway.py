"""SQLAlchemy User Gateway: UserGateway implementation over an async session manager.

Invariants:
    - One session per gateway call; each call commits or rolls back on its own
    - ORM rows never leave this module: callers receive UserRecord
    - Duplicate email surfaces as ConflictError via DatabaseSessionManager
    - update/delete on a missing id raise NotFoundError; find_by_id returns None

Design Decisions:
    - select-then-mutate over UPDATE ... RETURNING: portable across SQLite and
      PostgreSQL, and concurrent writers are left to the database's own isolation
    - find_all orders by nothing: natural table order is the contract
"""

import logging

from sqlalchemy import select

from user_api.core.domain_types import Operation, UserFields, UserId, UserRecord
from user_api.core.errors import NotFoundError
from user_api.infrastructure.database import DatabaseSessionManager
from user_api.models.user import User

logger = logging.getLogger(__name__)


class SqlAlchemyUserGateway:
    """Persist Users through SQLAlchemy."""

    def __init__(self, db_manager: DatabaseSessionManager):
        self._db = db_manager

    async def find_all(self) -> list[UserRecord]:
        async with self._db.session(Operation.LIST) as db:
            result = await db.execute(select(User))
            return [row.to_record() for row in result.scalars().all()]

    async def find_by_id(self, user_id: UserId) -> UserRecord | None:
        async with self._db.session(Operation.GET) as db:
            row = await db.get(User, user_id)
            return row.to_record() if row else None

    async def create(self, fields: UserFields) -> UserRecord:
        async with self._db.session(Operation.CREATE) as db:
            row = User(name=fields.name, email=fields.email, age=fields.age)
            db.add(row)
            await db.commit()
            logger.info("User created", extra={"user_id": row.id})
            return row.to_record()

    async def update(self, user_id: UserId, fields: UserFields) -> UserRecord:
        async with self._db.session(Operation.UPDATE) as db:
            row = await db.get(User, user_id)
            if row is None:
                raise NotFoundError(user_id, Operation.UPDATE)
            row.name = fields.name
            row.email = fields.email
            row.age = fields.age
            await db.commit()
            logger.info("User updated", extra={"user_id": row.id})
            return row.to_record()

    async def delete(self, user_id: UserId) -> None:
        async with self._db.session(Operation.DELETE) as db:
            row = await db.get(User, user_id)
            if row is None:
                raise NotFoundError(user_id, Operation.DELETE)
            await db.delete(row)
            await db.commit()
            logger.info("User deleted", extra={"user_id": user_id})

    async def health_check(self) -> bool:
        return await self._db.health_check()
