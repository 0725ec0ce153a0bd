"""Boundary Protocols: the persistence gateway contract between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - Gateways own all durable User state; handlers hold none between requests
    - Every backend failure surfaces as GatewayError or one of its subclasses:
        create  → ConflictError on duplicate email
        update  → NotFoundError when id absent, ConflictError on duplicate email
        delete  → NotFoundError when id absent
        find_by_id → None when id absent (absence is not an error on reads)
    - ids are generated by the gateway at create time and never change

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async methods: implementations do IO; each call is awaited as one atomic step
"""

from typing import Protocol

from user_api.core.domain_types import UserFields, UserId, UserRecord


class UserGateway(Protocol):
    """Contract for User persistence: implemented by shell."""
    async def find_all(self) -> list[UserRecord]: ...
    async def find_by_id(self, user_id: UserId) -> UserRecord | None: ...
    async def create(self, fields: UserFields) -> UserRecord: ...
    async def update(self, user_id: UserId, fields: UserFields) -> UserRecord: ...
    async def delete(self, user_id: UserId) -> None: ...
    async def health_check(self) -> bool: ...
