"""
Drug groups repository.
"""

from app.models import DrugGroup

from .database_repository import BaseRepository


class GroupsRepository(BaseRepository[DrugGroup]):
    """Repository for same-variety drug groups."""

    @property
    def items(self) -> list[DrugGroup]:
        return self.store.groups

    def find_containing(self, product_id: str) -> DrugGroup | None:
        """First group (in list order) whose members include the product."""
        return next((g for g in self.items if g.contains(product_id)), None)

    def find_all_containing(self, product_id: str) -> list[DrugGroup]:
        return [g for g in self.items if g.contains(product_id)]

    def grouped_ids(self) -> set[str]:
        """Every product ID that belongs to some group."""
        return {pid for group in self.items for pid in group.product_ids}

    def search(self, product_id: str | None = None, name: str | None = None) -> list[DrugGroup]:
        """
        Substring filter on the comma-joined member string and on the name.

        Args:
            product_id: Fragment to look for in the member string
            name: Fragment to look for in the group name

        Returns:
            Matching groups in list order
        """
        return [
            group
            for group in self.items
            if (not product_id or product_id in group.member_string)
            and (not name or name in group.name)
        ]
