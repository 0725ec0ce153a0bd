"""User ORM: persisted row for the single User entity.

Invariants:
    - id is a UUID4 string primary key, assigned on insert, never updated
    - email carries the named UNIQUE constraint uq_users_email: the database is
      the uniqueness authority
    - name, email, age are non-nullable; name and email are unbounded Text, so
      every value the validator accepts can be stored

Design Decisions:
    - String(36) id over native UUID: ids are opaque tokens on the HTTP path, so
      a malformed id must behave like an absent one instead of failing a cast
"""

import uuid

from sqlalchemy import Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from user_api.core.domain_types import UserId, UserRecord
from user_api.db.base import Base


EMAIL_UNIQUE_CONSTRAINT = "uq_users_email"


class User(Base):
    """User row: id plus the three mutable fields."""
    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("email", name=EMAIL_UNIQUE_CONSTRAINT),)

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)

    def to_record(self) -> UserRecord:
        return UserRecord(
            id=UserId(self.id), name=self.name, email=self.email, age=self.age,
        )
