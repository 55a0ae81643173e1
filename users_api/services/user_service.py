"""User Service — business rules on top of the UserRepository contract.

Invariants:
    - create() rejects empty first_name / last_name before touching the repository
    - Every other operation is pure delegation; repository errors pass through unchanged
    - Stateless apart from the injected logger
    - Exactly one repository call per operation
"""

import logging

from users_api.core.domain_types import UserId
from users_api.core.errors import FirstNameRequiredError, LastNameRequiredError
from users_api.core.field_patch import FieldPatch
from users_api.core.filters import UserFilters
from users_api.core.repository_protocols import UserRepository
from users_api.core.user import User


class UserService:
    """Orchestrates user operations. Holds no per-request state."""

    def __init__(
        self, repository: UserRepository, logger: logging.Logger | None = None,
    ):
        self._repository = repository
        self._log = logger or logging.getLogger(__name__)

    async def create(
        self, first_name: str, last_name: str, email: str, phone: str,
    ) -> User:
        self._log.info("create user service", extra={"operation": "create"})
        if not first_name:
            raise FirstNameRequiredError()
        if not last_name:
            raise LastNameRequiredError()
        user = User(
            first_name=first_name, last_name=last_name,
            email=email, phone=phone,
        )
        return await self._repository.create(user)

    async def get(self, user_id: UserId) -> User:
        self._log.info(
            "get user service", extra={"operation": "get", "user_id": user_id},
        )
        return await self._repository.get(user_id)

    async def get_all(
        self, filters: UserFilters, offset: int, limit: int,
    ) -> list[User]:
        self._log.info("get all users service", extra={"operation": "get_all"})
        return await self._repository.get_all(filters, offset, limit)

    async def count(self, filters: UserFilters) -> int:
        self._log.info("count users service", extra={"operation": "count"})
        return await self._repository.count(filters)

    async def update(
        self,
        user_id: UserId,
        first_name: FieldPatch,
        last_name: FieldPatch,
        email: FieldPatch,
        phone: FieldPatch,
    ) -> None:
        self._log.info(
            "update user service",
            extra={"operation": "update", "user_id": user_id},
        )
        await self._repository.update(
            user_id, first_name, last_name, email, phone,
        )

    async def delete(self, user_id: UserId) -> None:
        self._log.info(
            "delete user service",
            extra={"operation": "delete", "user_id": user_id},
        )
        await self._repository.delete(user_id)
