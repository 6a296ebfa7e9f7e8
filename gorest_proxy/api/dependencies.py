"""Request-scoped collaborators for the user routes.

The GoREST client is created once in the app lifespan and stored on
app.state; the repository and service are built per request around the
request's AsyncSession. Tests override get_db and get_gorest_client.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from gorest_proxy.infrastructure.database import get_db
from gorest_proxy.infrastructure.gorest_client import GoRestClient
from gorest_proxy.infrastructure.user_repository import SqlAlchemyUserRepository
from gorest_proxy.services.user_service import UserService


def get_gorest_client(request: Request) -> GoRestClient:
    client = getattr(request.app.state, "gorest_client", None)
    if client is None:
        raise RuntimeError("GoREST client not initialized")
    return client


def get_user_repository(
    db: AsyncSession = Depends(get_db),
) -> SqlAlchemyUserRepository:
    return SqlAlchemyUserRepository(db)


def get_user_service(
    repository: SqlAlchemyUserRepository = Depends(get_user_repository),
    remote: GoRestClient = Depends(get_gorest_client),
) -> UserService:
    return UserService(repository, remote)
