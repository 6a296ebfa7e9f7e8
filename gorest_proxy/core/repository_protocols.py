"""Boundary Protocols — contracts between core/services and the storage shell.

Invariants:
    - Services depend on these Protocols, never on a concrete repository
    - Implementations provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - Async in Protocol: implementations do IO
"""

from typing import Protocol, Sequence

from gorest_proxy.core.domain_types import UserId
from gorest_proxy.models.user import User


class UserLookup(Protocol):
    """The read-only capability the update validator needs."""
    async def find_by_id(self, user_id: UserId) -> User | None: ...


class UserRepository(UserLookup, Protocol):
    """Contract for user persistence — implemented by shell."""
    async def find_all(self) -> Sequence[User]: ...
    async def count(self) -> int: ...
    async def save(self, user: User) -> User: ...
    async def save_all(self, users: Sequence[User]) -> list[User]: ...
    async def delete_by_id(self, user_id: UserId) -> None: ...
    async def delete_all(self) -> None: ...
