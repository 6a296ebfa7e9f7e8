"""User Routes — the /user resource: local CRUD plus GoREST import.

Invariants:
    - Literal paths (/all, /deleteall, /uploadall, /upload/{id}) declared before /{user_id}
    - Path ids arrive as raw strings; parsing and the 400 happen in the service
    - Ok → entity/plain-text response; NotFound/ClientFault → from_outcome;
      anything raised → from_unexpected (via normalize_faults)
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse

from gorest_proxy.api.dependencies import get_user_service
from gorest_proxy.api.error_normalizer import from_outcome, normalize_faults
from gorest_proxy.core.outcomes import Ok, Outcome
from gorest_proxy.models.user import User
from gorest_proxy.schemas.user import UserPayload, UserResponse
from gorest_proxy.services.user_service import UserService

router = APIRouter(prefix="/user", tags=["users"])


def _user_response(outcome: Outcome[User], success_status: int) -> JSONResponse:
    if not isinstance(outcome, Ok):
        return from_outcome(outcome)
    return JSONResponse(
        status_code=success_status,
        content=UserResponse.model_validate(outcome.value).model_dump(),
    )


@router.get("/all", response_model=list[UserResponse])
@normalize_faults
async def list_users(service: UserService = Depends(get_user_service)):
    """All stored users, ordered by id."""
    users = await service.list_users()
    return [UserResponse.model_validate(u) for u in users]


@router.delete("/deleteall", response_class=PlainTextResponse)
@normalize_faults
async def delete_all_users(service: UserService = Depends(get_user_service)):
    deleted = await service.delete_all()
    return PlainTextResponse(f"Users Deleted:{deleted}")


@router.post("/uploadall", response_class=PlainTextResponse)
@normalize_faults
async def upload_all_users(service: UserService = Depends(get_user_service)):
    """Import every GoREST page into the local store."""
    created = await service.upload_all()
    return PlainTextResponse(f"Users Created:{created}")


@router.post(
    "/upload/{user_id}", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
@normalize_faults
async def upload_user(
    user_id: str, service: UserService = Depends(get_user_service),
):
    """Import one GoREST user, keeping its GoREST id."""
    return _user_response(
        await service.upload_user(user_id), status.HTTP_201_CREATED,
    )


@router.post(
    "/", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
)
@normalize_faults
async def create_user(
    body: UserPayload, service: UserService = Depends(get_user_service),
):
    return _user_response(
        await service.create_user(body), status.HTTP_201_CREATED,
    )


@router.put("/", response_model=UserResponse)
@normalize_faults
async def update_user(
    body: UserPayload, service: UserService = Depends(get_user_service),
):
    return _user_response(await service.update_user(body), status.HTTP_200_OK)


@router.get("/{user_id}", response_model=UserResponse)
@normalize_faults
async def get_user(
    user_id: str, service: UserService = Depends(get_user_service),
):
    return _user_response(await service.get_user(user_id), status.HTTP_200_OK)


@router.delete("/{user_id}", response_model=UserResponse)
@normalize_faults
async def delete_user(
    user_id: str, service: UserService = Depends(get_user_service),
):
    """Delete one user and return it as it was."""
    return _user_response(await service.delete_user(user_id), status.HTTP_200_OK)
