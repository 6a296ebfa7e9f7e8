"""SQLAlchemy User Repository — UserRepository Protocol over an AsyncSession.

Invariants:
    - save/save_all have upsert semantics (session.merge): an existing id is overwritten
    - Every mutating call commits before returning
    - find_all is ordered by id, so repeated reads without writes are identical
    - Every call raises DatabaseError (never a raw SQLAlchemy error), named after the call
    - On PostgreSQL, writing explicit ids moves the users.id sequence past MAX(id),
      so later database-assigned ids never collide with imported GoREST ids
"""

import functools
import logging
from typing import Any, Awaitable, Callable, Sequence

from sqlalchemy import delete, func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from gorest_proxy.core.domain_types import UserId
from gorest_proxy.infrastructure.database import database_faults
from gorest_proxy.models.user import User

logger = logging.getLogger(__name__)

SYNC_ID_SEQUENCE = text(
    "SELECT setval(pg_get_serial_sequence('users', 'id'), "
    "(SELECT COALESCE(MAX(id), 1) FROM users))"
)


def _storage_call(
    method: Callable[..., Awaitable[Any]],
) -> Callable[..., Awaitable[Any]]:
    @functools.wraps(method)
    async def wrapper(self: "SqlAlchemyUserRepository", *args, **kwargs):
        async with database_faults(self.db, method.__name__):
            return await method(self, *args, **kwargs)

    return wrapper


class SqlAlchemyUserRepository:
    """User persistence backed by one request-scoped AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @_storage_call
    async def find_by_id(self, user_id: UserId) -> User | None:
        return await self.db.get(User, user_id)

    @_storage_call
    async def find_all(self) -> Sequence[User]:
        result = await self.db.execute(select(User).order_by(User.id))
        return result.scalars().all()

    @_storage_call
    async def count(self) -> int:
        return await self.db.scalar(select(func.count()).select_from(User)) or 0

    @_storage_call
    async def save(self, user: User) -> User:
        explicit_id = user.id is not None
        merged = await self.db.merge(user)
        if explicit_id:
            await self._sync_id_sequence()
        await self.db.commit()
        return merged

    @_storage_call
    async def save_all(self, users: Sequence[User]) -> list[User]:
        explicit_id = any(user.id is not None for user in users)
        merged = [await self.db.merge(user) for user in users]
        if explicit_id:
            await self._sync_id_sequence()
        await self.db.commit()
        logger.info("Saved users", extra={"count": len(merged)})
        return merged

    @_storage_call
    async def delete_by_id(self, user_id: UserId) -> None:
        user = await self.db.get(User, user_id)
        if user is not None:
            await self.db.delete(user)
            await self.db.commit()

    @_storage_call
    async def delete_all(self) -> None:
        await self.db.execute(delete(User))
        await self.db.commit()

    async def _sync_id_sequence(self) -> None:
        # SQLite assigns max(rowid)+1 on its own
        if self.db.get_bind().dialect.name != "postgresql":
            return
        await self.db.flush()
        await self.db.execute(SYNC_ID_SEQUENCE)
