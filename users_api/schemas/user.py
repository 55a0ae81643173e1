"""User Schemas — Pydantic models for the HTTP boundary.

Invariants:
    - UserCreate fields default to "" so missing names reach the controller's
      required-name check instead of failing body parsing
    - UserUpdate: a key that is omitted or null is absent; "" is present-empty
    - UserResponse exposes id and created_at as result-only fields
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from users_api.core.domain_types import UserId
from users_api.core.field_patch import FieldPatch
from users_api.core.requests import CreateUserRequest, UpdateUserRequest
from users_api.core.user import User


class UserCreate(BaseModel):
    """POST body."""
    first_name: str = Field("", max_length=50)
    last_name: str = Field("", max_length=50)
    email: str = Field("", max_length=50)
    phone: str = Field("", max_length=30)

    def to_request(self) -> CreateUserRequest:
        return CreateUserRequest(
            first_name=self.first_name, last_name=self.last_name,
            email=self.email, phone=self.phone,
        )


class UserUpdate(BaseModel):
    """PATCH body. Every field optional."""
    model_config = ConfigDict(extra="forbid")

    first_name: str | None = Field(None, max_length=50)
    last_name: str | None = Field(None, max_length=50)
    email: str | None = Field(None, max_length=50)
    phone: str | None = Field(None, max_length=30)

    def to_request(self, user_id: str) -> UpdateUserRequest:
        return UpdateUserRequest(
            id=UserId(user_id),
            first_name=FieldPatch.from_optional(self.first_name),
            last_name=FieldPatch.from_optional(self.last_name),
            email=FieldPatch.from_optional(self.email),
            phone=FieldPatch.from_optional(self.phone),
        )


class UserResponse(BaseModel):
    """Public-facing user data."""
    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            phone=user.phone,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class Envelope(BaseModel):
    """Success envelope shared by every users route."""
    status: str = "success"
    data: Any = None
    meta: dict | None = None
