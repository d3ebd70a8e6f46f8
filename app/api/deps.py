"""
Dependency injection for FastAPI endpoints.
Provides the store, repository and service instances, and the request role.
"""

from fastapi import Depends, Header

from app.api.repository.applications_repository import ApplicationsRepository
from app.api.repository.groups_repository import GroupsRepository
from app.api.repository.products_repository import ProductsRepository
from app.core.config import Settings, get_settings
from app.core.exceptions import PermissionDeniedError, ValidationError
from app.core.store import InMemoryStore, get_store
from app.models import Role
from app.services.application_service import ApplicationService
from app.services.approval_service import ApprovalService
from app.services.group_service import GroupService


def get_role(x_role: str | None = Header(default=None)) -> Role:
    """
    Dependency that reads the caller's role from the ``X-Role`` header.

    Missing header means BUSINESS; values are case-insensitive.

    Raises:
        ValidationError: For an unknown role value
    """
    if x_role is None or not x_role.strip():
        return Role.BUSINESS
    try:
        return Role(x_role.strip().upper())
    except ValueError:
        raise ValidationError(f"Unknown role: {x_role}") from None


def require_business(role: Role = Depends(get_role)) -> Role:
    """
    Dependency that only lets business staff through.

    Raises:
        PermissionDeniedError: For any other role
    """
    if role != Role.BUSINESS:
        raise PermissionDeniedError("Only business staff may submit applications")
    return role


def require_compliance(role: Role = Depends(get_role)) -> Role:
    """
    Dependency that only lets compliance staff through.

    Raises:
        PermissionDeniedError: For any other role
    """
    if role != Role.COMPLIANCE:
        raise PermissionDeniedError("Only compliance staff may perform this action")
    return role


def get_products_repository(
    store: InMemoryStore = Depends(get_store),
) -> ProductsRepository:
    return ProductsRepository(store=store)


def get_groups_repository(
    store: InMemoryStore = Depends(get_store),
) -> GroupsRepository:
    return GroupsRepository(store=store)


def get_applications_repository(
    store: InMemoryStore = Depends(get_store),
) -> ApplicationsRepository:
    return ApplicationsRepository(store=store)


def get_group_service(
    groups_repo: GroupsRepository = Depends(get_groups_repository),
    products_repo: ProductsRepository = Depends(get_products_repository),
    settings: Settings = Depends(get_settings),
) -> GroupService:
    """
    Dependency that provides a GroupService for the list/browse view.

    Returns:
        GroupService: Service instance with business logic
    """
    return GroupService(groups_repo=groups_repo, products_repo=products_repo, settings=settings)


def get_application_service(
    applications_repo: ApplicationsRepository = Depends(get_applications_repository),
    groups_repo: GroupsRepository = Depends(get_groups_repository),
    products_repo: ProductsRepository = Depends(get_products_repository),
    settings: Settings = Depends(get_settings),
) -> ApplicationService:
    """
    Dependency that provides an ApplicationService for submissions.

    Returns:
        ApplicationService: Service instance with business logic
    """
    return ApplicationService(
        applications_repo=applications_repo,
        groups_repo=groups_repo,
        products_repo=products_repo,
        settings=settings,
    )


def get_approval_service(
    applications_repo: ApplicationsRepository = Depends(get_applications_repository),
    groups_repo: GroupsRepository = Depends(get_groups_repository),
    products_repo: ProductsRepository = Depends(get_products_repository),
    settings: Settings = Depends(get_settings),
) -> ApprovalService:
    """
    Dependency that provides an ApprovalService for the review queue.

    Returns:
        ApprovalService: Service instance with business logic
    """
    return ApprovalService(
        applications_repo=applications_repo,
        groups_repo=groups_repo,
        products_repo=products_repo,
        settings=settings,
    )
