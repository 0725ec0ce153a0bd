"""API test fixtures: FastAPI app over a real or scripted gateway.

Invariants:
    - `client` runs against SqlAlchemyUserGateway on in-memory SQLite
    - `scripted_gateway` records every call and raises configured errors,
      so tests can assert on the exact number of persistence calls

Design Decisions:
    - Gateway injected through create_app: no dependency_overrides needed
    - ASGITransport does not run the lifespan, so the injected gateway is
      the one handlers receive
"""

import pytest
from httpx import ASGITransport, AsyncClient

from user_api.core.domain_types import UserFields, UserId, UserRecord
from user_api.main import create_app


class ScriptedGateway:
    """UserGateway fake: logs calls, returns canned records or raises."""

    def __init__(self):
        self.calls: list[tuple[str, tuple]] = []
        self.errors: dict[str, Exception] = {}
        self.record = UserRecord(
            id=UserId("fixed-id"), name="John Doe",
            email="john.doe@example.com", age=30,
        )

    def _run(self, method: str, *args):
        self.calls.append((method, args))
        if method in self.errors:
            raise self.errors[method]

    async def find_all(self) -> list[UserRecord]:
        self._run("find_all")
        return [self.record]

    async def find_by_id(self, user_id: UserId) -> UserRecord | None:
        self._run("find_by_id", user_id)
        return self.record if user_id == self.record.id else None

    async def create(self, fields: UserFields) -> UserRecord:
        self._run("create", fields)
        return UserRecord(id=self.record.id, **vars(fields))

    async def update(self, user_id: UserId, fields: UserFields) -> UserRecord:
        self._run("update", user_id, fields)
        return UserRecord(id=user_id, **vars(fields))

    async def delete(self, user_id: UserId) -> None:
        self._run("delete", user_id)

    async def health_check(self) -> bool:
        self.calls.append(("health_check", ()))
        return "health_check" not in self.errors


@pytest.fixture
async def client(sql_gateway):
    """FastAPI test client over the SQLAlchemy gateway."""
    app = create_app(gateway=sql_gateway)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def scripted_gateway():
    return ScriptedGateway()


@pytest.fixture
async def scripted_client(scripted_gateway):
    """FastAPI test client over ScriptedGateway.

    raise_app_exceptions=False: unhandled errors come back as the 500 the
    catch-all handler renders instead of propagating into the test.
    """
    app = create_app(gateway=scripted_gateway)
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c
