"""Users Routes — HTTP adapter that decodes requests into typed pipeline values.

Invariants:
    - Routes hold no business logic: decode -> Endpoints.dispatch -> encode
    - Status codes decided here (success) and in error_handlers (failures)
    - Missing page or limit is 0, which the pagination step normalizes;
      a non-integer value is rejected by FastAPI with 400
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, status

from users_api.config import get_settings
from users_api.core.domain_types import UserId
from users_api.core.requests import (
    DeleteUserRequest, GetUserRequest, ListUsersRequest, RequestContext,
)
from users_api.schemas.user import Envelope, UserCreate, UserResponse, UserUpdate
from users_api.services.user_endpoints import Endpoints

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])


def get_endpoints(request: Request) -> Endpoints:
    """Endpoints built in the app lifespan."""
    return request.app.state.endpoints


def get_request_context(request: Request) -> RequestContext:
    """Correlation id from X-Request-ID (generated if absent) + configured deadline."""
    timeout = get_settings().request_timeout_seconds
    request_id = request.headers.get("x-request-id")
    if request_id:
        return RequestContext(request_id=request_id, timeout_seconds=timeout)
    return RequestContext(timeout_seconds=timeout)


@router.post(
    "", response_model=Envelope, status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate,
    ctx: RequestContext = Depends(get_request_context),
    endpoints: Endpoints = Depends(get_endpoints),
):
    """Create a user."""
    user = await endpoints.dispatch(ctx, body.to_request())
    return Envelope(data=UserResponse.from_domain(user))


@router.get("", response_model=Envelope)
async def list_users(
    first_name: str = Query(""),
    last_name: str = Query(""),
    page: int = Query(0),
    limit: int = Query(0),
    ctx: RequestContext = Depends(get_request_context),
    endpoints: Endpoints = Depends(get_endpoints),
):
    """List users, newest first, with optional name filters."""
    result = await endpoints.dispatch(ctx, ListUsersRequest(
        first_name=first_name, last_name=last_name, page=page, limit=limit,
    ))
    return Envelope(
        data=[UserResponse.from_domain(u) for u in result.users],
        meta=result.meta.to_dict(),
    )


@router.get("/{user_id}", response_model=Envelope)
async def get_user(
    user_id: str,
    ctx: RequestContext = Depends(get_request_context),
    endpoints: Endpoints = Depends(get_endpoints),
):
    """Get one user."""
    user = await endpoints.dispatch(ctx, GetUserRequest(id=UserId(user_id)))
    return Envelope(data=UserResponse.from_domain(user))


@router.patch("/{user_id}", response_model=Envelope)
async def update_user(
    user_id: str,
    body: UserUpdate,
    ctx: RequestContext = Depends(get_request_context),
    endpoints: Endpoints = Depends(get_endpoints),
):
    """Apply a partial update. Omitted fields are left unchanged."""
    ack = await endpoints.dispatch(ctx, body.to_request(user_id))
    return Envelope(data=ack.message)


@router.delete("/{user_id}", response_model=Envelope)
async def delete_user(
    user_id: str,
    ctx: RequestContext = Depends(get_request_context),
    endpoints: Endpoints = Depends(get_endpoints),
):
    """Delete a user."""
    ack = await endpoints.dispatch(ctx, DeleteUserRequest(id=UserId(user_id)))
    return Envelope(data=ack.message)
