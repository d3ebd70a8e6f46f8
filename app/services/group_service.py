"""
Drug group browsing and maintenance.
"""

from dataclasses import dataclass
from typing import Optional

from loguru import logger

from app.api.repository.groups_repository import GroupsRepository
from app.api.repository.products_repository import ProductsRepository
from app.core.config import Settings, get_settings
from app.core.exceptions import (
    ConfirmationRequiredError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from app.models import DrugGroup, Product
from app.utils.helpers import dedupe_ids, min_id, parse_product_ids


@dataclass
class GroupPage:
    groups: list[DrugGroup]
    total: int
    limit: int
    offset: int


@dataclass
class GroupDetail:
    """A group with its member products resolved against the catalog."""

    group: DrugGroup
    members: list[Product]

    def is_main(self, product_id: str) -> bool:
        return product_id == self.group.id


class GroupService:
    def __init__(
        self,
        groups_repo: GroupsRepository,
        products_repo: ProductsRepository,
        settings: Settings | None = None,
    ):
        self.groups_repo = groups_repo
        self.products_repo = products_repo
        self.settings = settings or get_settings()

    def list_groups(
        self,
        product_id: Optional[str] = None,
        name: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> GroupPage:
        """
        Filter groups by member-ID and name fragments, then page the result.

        Args:
            product_id: Substring of the comma-joined member IDs
            name: Substring of the group name
            limit: Page size, defaults to ``group_page_size``
            offset: Number of matching groups to skip
        """
        limit = limit or self.settings.group_page_size
        matches = self.groups_repo.search(
            product_id=(product_id or "").strip() or None,
            name=(name or "").strip() or None,
        )
        return GroupPage(
            groups=matches[offset:offset + limit],
            total=len(matches),
            limit=limit,
            offset=offset,
        )

    def get_group(self, group_id: str) -> GroupDetail:
        group = self._get(group_id)
        return GroupDetail(group=group, members=self.products_repo.resolve(group.product_ids))

    def resolve_products(self, product_ids: list[str]) -> list[Product]:
        return self.products_repo.resolve(dedupe_ids(product_ids))

    def get_product(self, product_id: str) -> Product:
        product = self.products_repo.get_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found", resource="product")
        return product

    def update_group(
        self,
        group_id: str,
        name: Optional[str] = None,
        product_ids: Optional[str | list[str]] = None,
        main_id: Optional[str] = None,
    ) -> DrugGroup:
        """
        Edit a group's name, members and main ID.

        The same rules as an approval commit apply: at least
        ``group_min_members`` members, main ID among them, and no other group
        already using that ID. Omitted fields keep their current value; when
        the members change and the current main ID drops out, the numerically
        smallest member becomes the main ID.
        """
        group = self._get(group_id)

        if product_ids is None:
            members = list(group.product_ids)
        elif isinstance(product_ids, str):
            members = parse_product_ids(product_ids)
        else:
            members = dedupe_ids(product_ids)

        if main_id is not None and main_id.strip():
            new_main = main_id.strip()
        elif group.id in members:
            new_main = group.id
        else:
            new_main = min_id(members)

        minimum = self.settings.group_min_members
        if len(members) < minimum:
            raise ValidationError(f"A group needs at least {minimum} product IDs")
        if new_main not in members:
            raise ValidationError(
                f"Main ID ({new_main}) must be included in the product ID list",
                product_ids=members,
            )
        owner = self.groups_repo.get_by_id(new_main)
        if owner is not None and owner is not group:
            raise ConflictError(f"Main ID {new_main} is already the ID of group '{owner.name}'")

        if name is not None:
            if not name.strip():
                raise ValidationError("Group name cannot be empty")
            group.name = name.strip()
        group.replace(new_main, members)
        logger.info(f"Group {group_id} updated: id={group.id}, members={len(members)}")
        return group

    def delete_group(self, group_id: str, confirm: bool = False) -> DrugGroup:
        """
        Remove a group. Deletion cannot be undone, so it must be confirmed.

        Raises:
            ConfirmationRequiredError: When ``confirm`` is not set
        """
        group = self._get(group_id)
        if not confirm:
            raise ConfirmationRequiredError(
                f"Deleting group {group_id} cannot be undone; repeat with confirm=true"
            )
        self.groups_repo.delete(group_id)
        logger.info(f"Group {group_id} deleted ({group.name})")
        return group

    def _get(self, group_id: str) -> DrugGroup:
        group = self.groups_repo.get_by_id(group_id)
        if group is None:
            raise NotFoundError(f"Group {group_id} not found", resource="group")
        return group
