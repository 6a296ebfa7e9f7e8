"""User Service — orchestrates id parsing, validation, GoREST fetches and persistence.

Invariants:
    - Each operation performs at most one validation pass
    - Bad ids → ClientFault; missing records → NotFound; invalid fields → ClientFault
    - Storage/remote faults propagate as exceptions to the API boundary
    - Created users never reuse a client-supplied id; GoREST users keep theirs
    - GoREST records pass the same field rules as locally created users

Design Decisions:
    - Collaborators injected via constructor (repository Protocol + GoRestClient)
    - Bulk import skips (and logs) records that fail the field rules; a single
      import of an invalid record is a remote fault
"""

import logging
from typing import Sequence

from gorest_proxy.core.domain_types import UserId
from gorest_proxy.core.errors import ErrorContext, RemoteAPIError
from gorest_proxy.core.outcomes import ClientFault, NotFound, Ok, Outcome
from gorest_proxy.core.parse_user_id import invalid_id_message, parse_user_id
from gorest_proxy.core.repository_protocols import UserRepository
from gorest_proxy.core.validate_user import check_user_fields
from gorest_proxy.infrastructure.gorest_client import GoRestClient
from gorest_proxy.models.user import User
from gorest_proxy.schemas.user import RemoteUser, UserPayload
from gorest_proxy.services.validate_user import validate_user

logger = logging.getLogger(__name__)


def _local_not_found(user_id: UserId) -> NotFound:
    return NotFound(f"User Not Found With ID:{user_id}")


def _to_model(source: UserPayload | RemoteUser, keep_id: bool) -> User:
    return User(
        id=source.id if keep_id else None,
        name=source.name,
        email=source.email,
        gender=source.gender,
        status=source.status,
    )


class UserService:
    """One instance per request; holds that request's collaborators."""

    def __init__(self, repository: UserRepository, remote: GoRestClient):
        self.repository = repository
        self.remote = remote

    async def get_user(self, raw_id: str) -> Outcome[User]:
        user_id = parse_user_id(raw_id)
        if user_id is None:
            return ClientFault(invalid_id_message(raw_id))
        user = await self.repository.find_by_id(user_id)
        if user is None:
            return _local_not_found(user_id)
        return Ok(user)

    async def list_users(self) -> Sequence[User]:
        return await self.repository.find_all()

    async def delete_user(self, raw_id: str) -> Outcome[User]:
        """Delete one user; the Ok value is the record as it was before deletion."""
        found = await self.get_user(raw_id)
        if not isinstance(found, Ok):
            return found
        await self.repository.delete_by_id(UserId(found.value.id))
        logger.info("Deleted user", extra={"user_id": found.value.id})
        return found

    async def delete_all(self) -> int:
        total = await self.repository.count()
        await self.repository.delete_all()
        logger.info("Deleted all users", extra={"count": total})
        return total

    async def create_user(self, payload: UserPayload) -> Outcome[User]:
        errors = await validate_user(payload, self.repository, is_update=False)
        if errors.has_error:
            return ClientFault(str(errors), errors.to_details())
        saved = await self.repository.save(_to_model(payload, keep_id=False))
        logger.info("Created user", extra={"user_id": saved.id})
        return Ok(saved)

    async def update_user(self, payload: UserPayload) -> Outcome[User]:
        errors = await validate_user(payload, self.repository, is_update=True)
        if errors.has_error:
            return ClientFault(str(errors), errors.to_details())
        saved = await self.repository.save(_to_model(payload, keep_id=True))
        logger.info("Updated user", extra={"user_id": saved.id})
        return Ok(saved)

    async def upload_user(self, raw_id: str) -> Outcome[User]:
        """Fetch one user from GoREST and store it under its GoREST id."""
        user_id = parse_user_id(raw_id)
        if user_id is None:
            return ClientFault(invalid_id_message(raw_id))

        fetched = await self.remote.fetch_one(user_id)
        if not isinstance(fetched, Ok):
            return fetched

        errors = check_user_fields(fetched.value)
        if errors.has_error:
            raise RemoteAPIError(
                f"user {user_id} failed validation: {errors}",
                context=ErrorContext(user_id=user_id),
            )
        saved = await self.repository.save(_to_model(fetched.value, keep_id=True))
        logger.info("Uploaded user from GoREST", extra={"user_id": saved.id})
        return Ok(saved)

    async def upload_all(self) -> int:
        """Fetch every GoREST page and store all valid users; returns the stored count."""
        remote_users = await self.remote.fetch_all_pages()

        valid: dict[int, User] = {}
        for remote_user in remote_users:
            errors = check_user_fields(remote_user)
            if errors.has_error:
                logger.warning(
                    f"Skipping GoREST user that failed validation: {errors}",
                    extra={"user_id": remote_user.id},
                )
                continue
            # later pages win when GoREST repeats an id
            valid[remote_user.id] = _to_model(remote_user, keep_id=True)

        saved = await self.repository.save_all(list(valid.values()))
        return len(saved)
