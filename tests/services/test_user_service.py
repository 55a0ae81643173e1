"""User Service — tests for business rules and pure delegation.

Tests cover:
    - create rejects empty names without calling the repository
    - create returns the repository's persisted user
    - other operations delegate unchanged and propagate repository errors
"""

import logging

import pytest

from users_api.core.errors import (
    FirstNameRequiredError, LastNameRequiredError, StorageError, UserNotFoundError,
)
from users_api.core.field_patch import ABSENT, FieldPatch
from users_api.core.filters import UserFilters
from users_api.core.user import User
from users_api.services.user_service import UserService


async def test_create_rejects_empty_first_name(service, mock_repository):
    with pytest.raises(FirstNameRequiredError):
        await service.create("", "Lovelace", "", "")
    mock_repository.create.assert_not_called()


async def test_create_rejects_empty_last_name(service, mock_repository):
    with pytest.raises(LastNameRequiredError):
        await service.create("Ada", "", "", "")
    mock_repository.create.assert_not_called()


async def test_create_builds_user_and_returns_persisted(service, mock_repository):
    user = await service.create("Ada", "Lovelace", "ada@example.com", "555")
    assert user.id == "generated-id"
    assert (user.first_name, user.last_name, user.email, user.phone) == (
        "Ada", "Lovelace", "ada@example.com", "555",
    )
    sent = mock_repository.create.call_args.args[0]
    assert sent.id == ""


async def test_get_propagates_not_found(service, mock_repository):
    mock_repository.get.side_effect = UserNotFoundError("missing")
    with pytest.raises(UserNotFoundError):
        await service.get("missing")


async def test_get_all_and_count_delegate(service, mock_repository):
    filters = UserFilters(first_name="an")
    mock_repository.count.return_value = 7
    mock_repository.get_all.return_value = [User(first_name="Ana", last_name="L")]

    assert await service.count(filters) == 7
    assert len(await service.get_all(filters, 5, 5)) == 1
    mock_repository.count.assert_awaited_once_with(filters)
    mock_repository.get_all.assert_awaited_once_with(filters, 5, 5)


async def test_update_passes_patches_through(service, mock_repository):
    email = FieldPatch.present("")
    await service.update("u1", ABSENT, ABSENT, email, ABSENT)
    mock_repository.update.assert_awaited_once_with("u1", ABSENT, ABSENT, email, ABSENT)


async def test_delete_propagates_storage_error(service, mock_repository):
    mock_repository.delete.side_effect = StorageError("down", "execute")
    with pytest.raises(StorageError):
        await service.delete("u1")


async def test_service_uses_injected_logger(mock_repository, caplog):
    log = logging.getLogger("test.users.service")
    svc = UserService(mock_repository, log)
    with caplog.at_level(logging.INFO, logger="test.users.service"):
        await svc.count(UserFilters())
    assert any(r.name == "test.users.service" for r in caplog.records)
