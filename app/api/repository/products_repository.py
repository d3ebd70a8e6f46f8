"""
Products repository for the read-only product catalog.
"""

from app.core.store import InMemoryStore
from app.models import Product, RxType


class ProductsRepository:
    """
    Repository for catalog lookups.

    The catalog is keyed by product ID and never mutated.
    """

    def __init__(self, store: InMemoryStore):
        self.store = store

    @property
    def catalog(self) -> dict[str, Product]:
        return self.store.products

    def get_by_id(self, product_id: str) -> Product | None:
        return self.catalog.get(product_id)

    def exists(self, product_id: str) -> bool:
        return product_id in self.catalog

    def missing_ids(self, product_ids: list[str]) -> list[str]:
        """IDs from the list that the catalog does not know."""
        return [pid for pid in product_ids if pid not in self.catalog]

    def resolve(self, product_ids: list[str]) -> list[Product]:
        """
        Look up products in order, substituting a placeholder for unknown IDs.

        Args:
            product_ids: IDs to resolve

        Returns:
            One Product per ID; missing IDs yield ``Product.unknown``
        """
        return [self.catalog.get(pid) or Product.unknown(pid) for pid in product_ids]

    def find_by_name_and_rx_type(self, name: str, rx_type: RxType) -> list[Product]:
        """All catalog products with exactly this name and prescription type."""
        return [
            product
            for product in self.catalog.values()
            if product.name == name and product.rx_type == rx_type
        ]
