"""Pipeline Requests & Results — transport-independent values the controllers consume and return.

Invariants:
    - One frozen request type per OperationKind; `kind` is a ClassVar, not a payload field
    - UpdateUserRequest carries FieldPatch values, so absent and "" stay distinct
    - RequestContext is the only per-request state handed to controllers
"""

from dataclasses import dataclass, field
from typing import ClassVar, Union
from uuid import uuid4

from users_api.core.domain_types import OperationKind, UserId
from users_api.core.field_patch import ABSENT, FieldPatch
from users_api.core.filters import UserFilters
from users_api.core.pagination import PageMeta
from users_api.core.user import User


@dataclass(frozen=True)
class RequestContext:
    """Per-request scope: correlation id and the caller's deadline."""
    request_id: str = field(default_factory=lambda: uuid4().hex)
    timeout_seconds: float | None = None


# ─── Requests ────────────────────────────────────────────────────

@dataclass(frozen=True)
class CreateUserRequest:
    kind: ClassVar[OperationKind] = OperationKind.CREATE
    first_name: str
    last_name: str
    email: str = ""
    phone: str = ""


@dataclass(frozen=True)
class GetUserRequest:
    kind: ClassVar[OperationKind] = OperationKind.GET
    id: UserId


@dataclass(frozen=True)
class ListUsersRequest:
    kind: ClassVar[OperationKind] = OperationKind.GET_ALL
    first_name: str = ""
    last_name: str = ""
    page: int = 0
    limit: int = 0

    def filters(self) -> UserFilters:
        return UserFilters(first_name=self.first_name, last_name=self.last_name)


@dataclass(frozen=True)
class UpdateUserRequest:
    kind: ClassVar[OperationKind] = OperationKind.UPDATE
    id: UserId
    first_name: FieldPatch = ABSENT
    last_name: FieldPatch = ABSENT
    email: FieldPatch = ABSENT
    phone: FieldPatch = ABSENT


@dataclass(frozen=True)
class DeleteUserRequest:
    kind: ClassVar[OperationKind] = OperationKind.DELETE
    id: UserId


UserRequest = Union[
    CreateUserRequest, GetUserRequest, ListUsersRequest,
    UpdateUserRequest, DeleteUserRequest,
]


# ─── Results ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class UserPage:
    """One page of users plus the pagination metadata it was cut with."""
    users: list[User]
    meta: PageMeta


@dataclass(frozen=True)
class Acknowledgement:
    """Success marker for operations that do not re-read the store."""
    message: str


UserResult = Union[User, UserPage, Acknowledgement]
