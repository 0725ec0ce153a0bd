"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - UserId is an opaque string token: never parsed or format-checked
    - UserFields is only ever produced by validate_user (already normalized)
    - AGE_MIN / AGE_MAX are the single source of truth for the age bounds

Design Decisions:
    - Frozen dataclasses over ORM objects: core never sees SQLAlchemy rows,
      gateways convert at the boundary
    - str Enum for Operation: logs and error codes serialize without encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)


# ─── Value Bounds ────────────────────────────────────────────────

AGE_MIN: int = 18
AGE_MAX: int = 100


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class UserFields:
    """The three mutable fields of a User, validated and normalized."""
    name: str
    email: str
    age: int


@dataclass(frozen=True)
class UserRecord:
    """A stored User as returned by the persistence gateway."""
    id: UserId
    name: str
    email: str
    age: int

    @property
    def fields(self) -> UserFields:
        return UserFields(name=self.name, email=self.email, age=self.age)


# ─── Enums ───────────────────────────────────────────────────────

class Operation(str, Enum):
    """The five resource operations: drives failure-to-response mapping."""
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
