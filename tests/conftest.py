"""Pytest configuration and shared fixtures.

Every test gets its own freshly seeded store so mutations never leak
between tests.
"""
import pytest
from fastapi.testclient import TestClient

from app.api.repository.applications_repository import ApplicationsRepository
from app.api.repository.groups_repository import GroupsRepository
from app.api.repository.products_repository import ProductsRepository
from app.core.config import get_settings
from app.core.store import InMemoryStore, get_store
from app.main import app
from app.services.application_service import ApplicationService
from app.services.approval_service import ApprovalService
from app.services.group_service import GroupService


@pytest.fixture
def store():
    """Fresh store seeded with the mock catalog, groups and applications."""
    return InMemoryStore.seeded()


@pytest.fixture
def products_repo(store):
    return ProductsRepository(store)


@pytest.fixture
def groups_repo(store):
    return GroupsRepository(store)


@pytest.fixture
def applications_repo(store):
    return ApplicationsRepository(store)


@pytest.fixture
def application_service(applications_repo, groups_repo, products_repo):
    return ApplicationService(applications_repo, groups_repo, products_repo, get_settings())


@pytest.fixture
def approval_service(applications_repo, groups_repo, products_repo):
    return ApprovalService(applications_repo, groups_repo, products_repo, get_settings())


@pytest.fixture
def group_service(groups_repo, products_repo):
    return GroupService(groups_repo, products_repo, get_settings())


@pytest.fixture
def client(store):
    """TestClient whose requests all see the per-test store."""
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.pop(get_store, None)


@pytest.fixture
def compliance():
    """Headers for a compliance-staff request."""
    return {"X-Role": "COMPLIANCE"}


@pytest.fixture
def business():
    """Headers for a business-staff request."""
    return {"X-Role": "BUSINESS"}
