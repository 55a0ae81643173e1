"""Boundary Protocols — persistence contract between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Failures are raised as UserNotFoundError, ConflictError or StorageError
    - count() and get_all() apply the identical filter predicate
    - update() writes only present FieldPatch values; an all-absent patch is a no-op
    - Implementations never retry internally

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Async methods: implementations do IO; cancellation flows through the await
"""

from typing import Protocol

from users_api.core.domain_types import UserId
from users_api.core.field_patch import FieldPatch
from users_api.core.filters import UserFilters
from users_api.core.user import User


class UserRepository(Protocol):
    """Contract for user persistence, implemented by infrastructure."""
    async def create(self, user: User) -> User: ...
    async def get(self, user_id: UserId) -> User: ...
    async def get_all(
        self, filters: UserFilters, offset: int, limit: int,
    ) -> list[User]: ...
    async def count(self, filters: UserFilters) -> int: ...
    async def update(
        self,
        user_id: UserId,
        first_name: FieldPatch,
        last_name: FieldPatch,
        email: FieldPatch,
        phone: FieldPatch,
    ) -> None: ...
    async def delete(self, user_id: UserId) -> None: ...
