"""GoREST Client — fetches one user or every page of users from the GoREST API.

Invariants:
    - Remote 404 (or an empty body) on a single user → NotFound, never raised
    - Any other non-2xx, transport error, or malformed JSON → RemoteAPIError
    - Pages are fetched strictly in order 1..N; each page's own records are appended
    - A failure on any page aborts the whole fetch (no skip, no retry)
    - Total pages come from the X-Pagination-Pages header of page 1;
      a missing header means a single page

Design Decisions:
    - Wrapper over a raw httpx.AsyncClient: timeouts and base URL live here, and
      tests inject a client built on httpx.MockTransport
"""

import logging

import httpx
from pydantic import ValidationError as PydanticValidationError

from gorest_proxy.core.domain_types import UserId
from gorest_proxy.core.errors import ErrorContext, RemoteAPIError
from gorest_proxy.core.outcomes import NotFound, Ok
from gorest_proxy.schemas.user import RemoteUser

logger = logging.getLogger(__name__)

PAGINATION_PAGES_HEADER = "X-Pagination-Pages"
USERS_PATH = "/users"


def build_async_client(base_url: str, timeout_seconds: float = 30.0) -> httpx.AsyncClient:
    """Create the shared httpx.AsyncClient used for GoREST calls."""
    return httpx.AsyncClient(
        base_url=base_url.rstrip("/"),
        timeout=httpx.Timeout(timeout_seconds),
        headers={"Accept": "application/json"},
    )


class GoRestClient:
    """Read-only GoREST users client."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    @classmethod
    def from_settings(cls, base_url: str, timeout_seconds: float = 30.0) -> "GoRestClient":
        return cls(build_async_client(base_url, timeout_seconds))

    async def aclose(self) -> None:
        await self.client.aclose()

    async def fetch_one(self, user_id: UserId) -> Ok[RemoteUser] | NotFound:
        """GET /users/{id}."""
        context = ErrorContext(user_id=user_id)
        response = await self._get(f"{USERS_PATH}/{user_id}", context=context)

        if response.status_code == httpx.codes.NOT_FOUND:
            logger.info("GoREST user not found", extra={"user_id": user_id})
            return NotFound(f"User Not Found on GoREST With ID:{user_id}")
        self._raise_for_status(response, context)

        data = self._json(response, context)
        if not data:
            return NotFound("User data was null")
        return Ok(self._parse_user(data, context))

    async def fetch_all_pages(self) -> list[RemoteUser]:
        """GET /users for page 1, then pages 2..N from X-Pagination-Pages."""
        first = await self._fetch_page(1)
        users = self._parse_page(first, ErrorContext(page=1))
        total_pages = self._total_pages(first)
        logger.info(
            "Fetched first GoREST page",
            extra={"page": 1, "total_pages": total_pages, "count": len(users)},
        )

        for page in range(2, total_pages + 1):
            response = await self._fetch_page(page)
            users.extend(self._parse_page(response, ErrorContext(page=page)))

        return users

    async def _fetch_page(self, page: int) -> httpx.Response:
        context = ErrorContext(page=page)
        params = {"page": page} if page > 1 else None
        response = await self._get(USERS_PATH, params=params, context=context)
        self._raise_for_status(response, context)
        return response

    async def _get(
        self, path: str, *, params: dict | None = None, context: ErrorContext,
    ) -> httpx.Response:
        try:
            return await self.client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.error(f"GoREST request failed: {e}", extra={"path": path})
            raise RemoteAPIError(
                f"request to {path} failed: {e}", context=context,
            ) from e

    def _raise_for_status(self, response: httpx.Response, context: ErrorContext) -> None:
        if response.is_success:
            return
        where = f"page {context.page}" if context.page else str(response.request.url)
        raise RemoteAPIError(
            f"failed to get {where} ({response.status_code})",
            remote_status=response.status_code,
            context=context,
        )

    def _json(self, response: httpx.Response, context: ErrorContext):
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RemoteAPIError("response was not valid JSON", context=context) from e

    def _parse_user(self, data, context: ErrorContext) -> RemoteUser:
        try:
            return RemoteUser.model_validate(data)
        except PydanticValidationError as e:
            raise RemoteAPIError(
                f"unexpected user payload: {e.error_count()} error(s)", context=context,
            ) from e

    def _parse_page(self, response: httpx.Response, context: ErrorContext) -> list[RemoteUser]:
        data = self._json(response, context)
        if not isinstance(data, list):
            raise RemoteAPIError(
                f"page {context.page} did not contain a list of users", context=context,
            )
        return [self._parse_user(item, context) for item in data]

    def _total_pages(self, response: httpx.Response) -> int:
        raw = response.headers.get(PAGINATION_PAGES_HEADER)
        if raw is None:
            logger.warning(f"{PAGINATION_PAGES_HEADER} header missing, assuming 1 page")
            return 1
        try:
            return max(int(raw.strip()), 1)
        except ValueError as e:
            raise RemoteAPIError(
                f"invalid {PAGINATION_PAGES_HEADER} header: {raw!r}",
                context=ErrorContext(page=1),
            ) from e
