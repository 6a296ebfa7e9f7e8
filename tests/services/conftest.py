"""Service test fixtures — async DB, fake GoREST, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - get_gorest_client overridden with a GoRestClient over httpx.MockTransport
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - StaticPool: every session shares the single in-memory connection
    - FakeGoRest answers /users and /users/{id} from in-memory data, so the real
      GoRestClient (headers, paging, error mapping) is exercised end to end
"""

import httpx
import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from gorest_proxy.api.dependencies import get_gorest_client
from gorest_proxy.db.base import Base
from gorest_proxy.infrastructure.database import get_db, DatabaseSessionManager
from gorest_proxy.infrastructure.gorest_client import (
    GoRestClient, PAGINATION_PAGES_HEADER,
)
from gorest_proxy.models.user import User
import gorest_proxy.infrastructure.database as db_module
from gorest_proxy.main import app

GOREST_BASE_URL = "https://gorest.test/public/v2"


def make_remote_user(user_id: int, **overrides) -> dict:
    user = {
        "id": user_id,
        "name": f"Remote User {user_id}",
        "email": f"remote{user_id}@example.com",
        "gender": "female" if user_id % 2 else "male",
        "status": "active",
    }
    user.update(overrides)
    return user


class FakeGoRest:
    """In-memory stand-in for the GoREST users endpoints."""

    def __init__(self):
        self.pages: list[list[dict]] = []
        self.users: dict[int, dict | None] = {}
        self.failing_pages: set[int] = set()
        self.send_pages_header = True
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        segments = request.url.path.rstrip("/").split("/")
        if segments[-1] == "users":
            return self._page(int(request.url.params.get("page", "1")))
        return self._user(int(segments[-1]))

    def _page(self, page: int) -> httpx.Response:
        if page in self.failing_pages:
            return httpx.Response(500, json={"message": "boom"})
        data = self.pages[page - 1] if page <= len(self.pages) else []
        headers = {}
        if self.send_pages_header:
            headers[PAGINATION_PAGES_HEADER] = str(max(len(self.pages), 1))
        return httpx.Response(200, json=data, headers=headers)

    def _user(self, user_id: int) -> httpx.Response:
        if user_id not in self.users:
            return httpx.Response(404, json={"message": "Resource not found"})
        data = self.users[user_id]
        if data is None:
            return httpx.Response(200, content=b"")
        return httpx.Response(200, json=data)

    def page_requests(self) -> list[int]:
        return [
            int(r.url.params.get("page", "1"))
            for r in self.requests if r.url.path.endswith("/users")
        ]


@pytest.fixture
def fake_gorest():
    return FakeGoRest()


@pytest.fixture
async def gorest_client(fake_gorest):
    client = GoRestClient(httpx.AsyncClient(
        base_url=GOREST_BASE_URL,
        transport=httpx.MockTransport(fake_gorest.handler),
    ))
    yield client
    await client.aclose()


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory, gorest_client):
    """FastAPI test client with DB and GoREST dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_gorest_client] = lambda: gorest_client

    original_manager = db_module.db_manager
    db_module.db_manager = DatabaseSessionManager.from_engine(test_engine)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_users(test_db):
    """Insert three users directly into the test DB."""
    users = [
        User(id=1, name="Ada", email="ada@example.com", gender="female", status="active"),
        User(id=2, name="Alan", email="alan@example.com", gender="male", status="inactive"),
        User(id=3, name="Sam", email="sam@example.com", gender="other", status="active"),
    ]
    test_db.add_all(users)
    await test_db.commit()
    return users


@pytest.fixture
def remote_user():
    """Factory for GoREST-shaped user dicts."""
    return make_remote_user
