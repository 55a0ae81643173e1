"""SQLAlchemy User Repository — implements core.repository_protocols.UserRepository.

Invariants:
    - One DB session per call; no transaction spans two calls
    - count() and get_all() share _filter_clauses(), so the predicates cannot diverge
    - Filters are case-insensitive `contains` with LIKE wildcards escaped
    - update() writes only present patches; missing id -> UserNotFoundError even for a no-op patch
    - Never retries
"""

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone

from sqlalchemy import ColumnElement, delete, func, select, update

from users_api.core.domain_types import UserId
from users_api.core.errors import UserNotFoundError
from users_api.core.field_patch import FieldPatch, collect_changes
from users_api.core.filters import UserFilters
from users_api.core.user import User
from users_api.infrastructure.database import DatabaseSessionManager
from users_api.models.user import UserModel


_FILTER_COLUMNS = {
    "first_name": UserModel.first_name,
    "last_name": UserModel.last_name,
}


def _filter_clauses(filters: UserFilters) -> list[ColumnElement[bool]]:
    """WHERE clauses for the active filters (empty list = match all)."""
    return [
        _FILTER_COLUMNS[name].icontains(needle, autoescape=True)
        for name, needle in filters.active().items()
    ]


def _to_domain(row: UserModel) -> User:
    return User(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        email=row.email,
        phone=row.phone,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlAlchemyUserRepository:
    """User persistence over an async SQLAlchemy engine."""

    def __init__(
        self, db: DatabaseSessionManager, logger: logging.Logger | None = None,
    ):
        self._db = db
        self._log = logger or logging.getLogger(__name__)

    async def create(self, user: User) -> User:
        if not user.id:
            user = replace(user, id=str(uuid.uuid4()))
        async with self._db.session() as session:
            session.add(UserModel(
                id=user.id,
                first_name=user.first_name,
                last_name=user.last_name,
                email=user.email,
                phone=user.phone,
                created_at=user.created_at,
            ))
            await session.commit()
        self._log.info(f"user created with id: {user.id}", extra={"user_id": user.id})
        return user

    async def get(self, user_id: UserId) -> User:
        async with self._db.session() as session:
            row = await session.get(UserModel, user_id)
            if row is None:
                raise UserNotFoundError(user_id)
            return _to_domain(row)

    async def get_all(
        self, filters: UserFilters, offset: int, limit: int,
    ) -> list[User]:
        query = (
            select(UserModel)
            .where(*_filter_clauses(filters))
            .order_by(UserModel.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        async with self._db.session() as session:
            result = await session.execute(query)
            return [_to_domain(row) for row in result.scalars().all()]

    async def count(self, filters: UserFilters) -> int:
        query = (
            select(func.count())
            .select_from(UserModel)
            .where(*_filter_clauses(filters))
        )
        async with self._db.session() as session:
            result = await session.execute(query)
            return int(result.scalar_one())

    async def update(
        self,
        user_id: UserId,
        first_name: FieldPatch,
        last_name: FieldPatch,
        email: FieldPatch,
        phone: FieldPatch,
    ) -> None:
        values = collect_changes(
            first_name=first_name, last_name=last_name,
            email=email, phone=phone,
        )
        async with self._db.session() as session:
            if not values:
                exists = await session.scalar(
                    select(UserModel.id).where(UserModel.id == user_id),
                )
                if exists is None:
                    raise UserNotFoundError(user_id)
                return

            values["updated_at"] = datetime.now(timezone.utc)
            result = await session.execute(
                update(UserModel).where(UserModel.id == user_id).values(**values),
            )
            if result.rowcount == 0:
                await session.rollback()
                raise UserNotFoundError(user_id)
            await session.commit()
        self._log.info(
            f"user {user_id} updated: {sorted(values)}", extra={"user_id": user_id},
        )

    async def delete(self, user_id: UserId) -> None:
        async with self._db.session() as session:
            result = await session.execute(
                delete(UserModel).where(UserModel.id == user_id),
            )
            if result.rowcount == 0:
                await session.rollback()
                raise UserNotFoundError(user_id)
            await session.commit()
        self._log.info(f"user {user_id} deleted", extra={"user_id": user_id})
