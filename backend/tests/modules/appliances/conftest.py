"""
Pytest fixtures for appliances module tests.
"""

import pytest

from modules.appliances.ownership import OwnerResolver
from modules.appliances.service import ApplianceService

from .fakes import FIXED_NOW, InMemoryApplianceRepository

DEFAULT_OWNER_EMAIL = "default@example.com"
DEFAULT_OWNER_ID = "default-user"


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def repository() -> InMemoryApplianceRepository:
    return InMemoryApplianceRepository()


@pytest.fixture
def owner_resolver() -> OwnerResolver:
    users = {DEFAULT_OWNER_EMAIL: DEFAULT_OWNER_ID}
    return OwnerResolver(users.get, DEFAULT_OWNER_EMAIL)


@pytest.fixture
def service(repository, owner_resolver) -> ApplianceService:
    return ApplianceService(
        repository=repository,
        owner_resolver=owner_resolver,
        clock=lambda: FIXED_NOW,
    )
