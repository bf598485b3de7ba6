# User endpoints
from uuid import UUID

from fastapi import APIRouter, Depends, status

from accounts.api.deps import Requester, get_requester, get_user_service
from accounts.core.errors import UnauthorizedError
from accounts.core.rate_limit import check_rate_limit
from accounts.core.security import Token
from accounts.models.schemas import (
    ErrorResponse,
    SuccessResponse,
    UserCreate,
    UserLogin,
    UserResponse,
    UserUpdate,
)
from accounts.services.user_service import UserService

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
}

router = APIRouter(prefix="/users", tags=["users"], responses=ERROR_RESPONSES)


@router.post(
    "/register",
    response_model=SuccessResponse[UUID],
    dependencies=[Depends(check_rate_limit)],
)
def register_user(
    data: UserCreate,
    service: UserService = Depends(get_user_service),
):
    """Create a new user account and return its ID."""
    user_id = service.register(data)
    return SuccessResponse(data=user_id)


@router.post(
    "/login",
    response_model=SuccessResponse[Token],
    dependencies=[Depends(check_rate_limit)],
)
def login(
    data: UserLogin,
    service: UserService = Depends(get_user_service),
):
    """
    Authenticate a user and return a bearer token.

    No JWT authentication required for this endpoint. Unknown email and
    wrong password produce the same error.
    """
    token = service.login(data)
    return SuccessResponse(data=token)


@router.get("/", response_model=SuccessResponse[list[UserResponse]])
def list_users(service: UserService = Depends(get_user_service)):
    users = service.get_all_users()
    return SuccessResponse(data=[UserResponse.model_validate(u) for u in users])


@router.get("/{id}", response_model=SuccessResponse[UserResponse])
def get_user(
    id: UUID,
    requester: Requester = Depends(get_requester),
    service: UserService = Depends(get_user_service),
):
    """Return the authenticated caller's own record.

    The path ID is validated but not used for the lookup.
    """
    user = service.get_user_by_id(requester.user_id)
    return SuccessResponse(data=UserResponse.model_validate(user))


@router.patch("/{id}", response_model=SuccessResponse[bool])
def update_user(
    id: UUID,
    data: UserUpdate,
    requester: Requester = Depends(get_requester),
    service: UserService = Depends(get_user_service),
):
    """Update the caller's own profile. Other users' records are off limits."""
    if requester.user_id != id:
        raise UnauthorizedError("unauthorized: ID does not match")

    service.update_user(id, data)
    return SuccessResponse(data=True)


@router.delete("/{id}", response_model=SuccessResponse[bool])
def delete_user(
    id: UUID,
    service: UserService = Depends(get_user_service),
):
    service.delete_user(id)
    return SuccessResponse(data=True)
