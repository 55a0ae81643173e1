"""User Endpoints — one controller per operation, plus explicit dispatch by OperationKind.

Invariants:
    - Every controller has the shape (RequestContext, typed request) -> typed result
    - Create/Update validate required names BEFORE the service is called
    - GetAll runs count -> compute_page -> get_all, strictly in that order
    - Update/Delete return an Acknowledgement; the store is not re-read
    - A timeout on the caller's deadline surfaces as StorageTimeoutError; nothing is retried
    - Service errors pass through unchanged

Design Decisions:
    - Explicit dict from OperationKind to controller, checked for completeness at construction
    - Count and fetch are not run in one read transaction; their totals may drift
      under concurrent writes
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

from users_api.core.domain_types import OperationKind
from users_api.core.errors import (
    ErrorContext, FirstNameRequiredError, LastNameRequiredError,
    StorageTimeoutError, UsersApiError,
)
from users_api.core.pagination import compute_page
from users_api.core.requests import (
    Acknowledgement, CreateUserRequest, DeleteUserRequest, GetUserRequest,
    ListUsersRequest, RequestContext, UpdateUserRequest, UserPage,
    UserRequest, UserResult,
)
from users_api.core.user import User
from users_api.services.user_service import UserService

T = TypeVar("T")

Controller = Callable[[RequestContext, Any], Awaitable[UserResult]]


@dataclass(frozen=True)
class EndpointsConfig:
    """Controller-level settings, resolved once at startup."""
    default_page_limit: int


async def _within_deadline(
    ctx: RequestContext, operation: OperationKind, work: Awaitable[T],
) -> T:
    """Await work under the caller's deadline (None = no deadline).

    Typed errors are re-raised as-is, tagged with the request id and operation.
    """
    try:
        return await asyncio.wait_for(work, ctx.timeout_seconds)
    except UsersApiError as exc:
        exc.context.request_id = exc.context.request_id or ctx.request_id
        exc.context.operation = exc.context.operation or operation.value
        raise
    except asyncio.TimeoutError:
        raise StorageTimeoutError(
            operation.value, ctx.timeout_seconds or 0.0,
            ErrorContext(operation=operation.value, request_id=ctx.request_id),
        ) from None


def _error_context(ctx: RequestContext, operation: OperationKind) -> ErrorContext:
    return ErrorContext(operation=operation.value, request_id=ctx.request_id)


def make_create_endpoint(service: UserService, log: logging.Logger) -> Controller:
    async def create(ctx: RequestContext, req: CreateUserRequest) -> User:
        if not req.first_name:
            log.warning("create rejected: empty first_name")
            raise FirstNameRequiredError(_error_context(ctx, req.kind))
        if not req.last_name:
            log.warning("create rejected: empty last_name")
            raise LastNameRequiredError(_error_context(ctx, req.kind))

        return await _within_deadline(ctx, req.kind, service.create(
            req.first_name, req.last_name, req.email, req.phone,
        ))
    return create


def make_get_endpoint(service: UserService) -> Controller:
    async def get(ctx: RequestContext, req: GetUserRequest) -> User:
        return await _within_deadline(ctx, req.kind, service.get(req.id))
    return get


def make_get_all_endpoint(
    service: UserService, config: EndpointsConfig, log: logging.Logger,
) -> Controller:
    async def get_all(ctx: RequestContext, req: ListUsersRequest) -> UserPage:
        filters = req.filters()

        async def _count_then_fetch() -> UserPage:
            count = await service.count(filters)
            meta = compute_page(
                req.page, req.limit, count, config.default_page_limit,
            )
            users = await service.get_all(filters, meta.offset, meta.limit)
            log.debug(
                f"listed {len(users)} of {count} users",
                extra={"operation": req.kind.value},
            )
            return UserPage(users=users, meta=meta)

        return await _within_deadline(ctx, req.kind, _count_then_fetch())
    return get_all


def make_update_endpoint(service: UserService, log: logging.Logger) -> Controller:
    async def update(ctx: RequestContext, req: UpdateUserRequest) -> Acknowledgement:
        if req.first_name.is_empty:
            log.warning("update rejected: empty first_name", extra={"user_id": req.id})
            raise FirstNameRequiredError(_error_context(ctx, req.kind))
        if req.last_name.is_empty:
            log.warning("update rejected: empty last_name", extra={"user_id": req.id})
            raise LastNameRequiredError(_error_context(ctx, req.kind))

        await _within_deadline(ctx, req.kind, service.update(
            req.id, req.first_name, req.last_name, req.email, req.phone,
        ))
        return Acknowledgement("User updated successfully")
    return update


def make_delete_endpoint(service: UserService) -> Controller:
    async def delete(ctx: RequestContext, req: DeleteUserRequest) -> Acknowledgement:
        await _within_deadline(ctx, req.kind, service.delete(req.id))
        return Acknowledgement("User deleted successfully")
    return delete


class Endpoints:
    """The five user controllers. Routes OperationKind -> controller explicitly."""

    def __init__(
        self,
        service: UserService,
        config: EndpointsConfig,
        logger: logging.Logger | None = None,
    ):
        log = logger or logging.getLogger(__name__)
        self.create = make_create_endpoint(service, log)
        self.get = make_get_endpoint(service)
        self.get_all = make_get_all_endpoint(service, config, log)
        self.update = make_update_endpoint(service, log)
        self.delete = make_delete_endpoint(service)

        self._controllers: dict[OperationKind, Controller] = {
            OperationKind.CREATE: self.create,
            OperationKind.GET: self.get,
            OperationKind.GET_ALL: self.get_all,
            OperationKind.UPDATE: self.update,
            OperationKind.DELETE: self.delete,
        }
        missing = set(OperationKind) - set(self._controllers)
        if missing:
            raise RuntimeError(
                f"No controller registered for: {sorted(k.value for k in missing)}",
            )

    @property
    def operations(self) -> frozenset[OperationKind]:
        return frozenset(self._controllers)

    async def dispatch(self, ctx: RequestContext, request: UserRequest) -> UserResult:
        """Run the controller matching request.kind."""
        return await self._controllers[request.kind](ctx, request)
