from dataclasses import dataclass, field
from datetime import date


@dataclass
class DrugGroup:
    """
    A set of product IDs treated as the same variety.

    Attributes:
        id: Main ID of the group; one of ``product_ids``.
        name: Display name, usually the main product's name.
        product_ids: Ordered member IDs, unique within the group.
        created_at: Day the group was created.
    """

    id: str
    name: str
    product_ids: list[str]
    created_at: date = field(default_factory=date.today)

    def contains(self, product_id: str) -> bool:
        return product_id in self.product_ids

    def contains_all(self, product_ids: list[str]) -> bool:
        return all(pid in self.product_ids for pid in product_ids)

    @property
    def member_string(self) -> str:
        """Comma-joined members, used by the list filter."""
        return ",".join(self.product_ids)

    def replace(self, main_id: str, product_ids: list[str]) -> None:
        """Swap in a new main ID and member list in place."""
        self.id = main_id
        self.product_ids = list(product_ids)

    def __repr__(self) -> str:
        return f"<DrugGroup(id='{self.id}', name='{self.name}', members={len(self.product_ids)})>"
