"""Service test fixtures — mocked repository and wired service/endpoints.

Invariants:
    - mock_repository is an AsyncMock with the UserRepository method set
    - Endpoints use a default page limit of 10
"""

from unittest.mock import AsyncMock

import pytest

from users_api.core.user import User
from users_api.services.user_endpoints import Endpoints, EndpointsConfig
from users_api.services.user_service import UserService


@pytest.fixture
def mock_repository():
    repo = AsyncMock()
    repo.create.side_effect = lambda user: User(
        first_name=user.first_name, last_name=user.last_name,
        email=user.email, phone=user.phone,
        id="generated-id", created_at=user.created_at,
    )
    repo.count.return_value = 0
    repo.get_all.return_value = []
    return repo


@pytest.fixture
def service(mock_repository):
    return UserService(mock_repository)


@pytest.fixture
def endpoints(service):
    return Endpoints(service, EndpointsConfig(default_page_limit=10))
