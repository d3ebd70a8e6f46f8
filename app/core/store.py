# app/core/store.py
"""In-memory state and dependency providers.

The store holds the three collections the service works on: the product
catalog (read-only), the drug groups and the applications. A process-wide
instance is seeded from ``app.core.seed`` and injected into repositories
through ``get_store``.
"""
import itertools
from dataclasses import dataclass, field

from app.core.seed import initial_applications, initial_groups, initial_products
from app.models import Application, DrugGroup, Product


@dataclass
class InMemoryStore:
    """
    Top-level application state.

    ``groups`` and ``applications`` keep display order: new entries are
    inserted at the head.
    """

    products: dict[str, Product] = field(default_factory=dict)
    groups: list[DrugGroup] = field(default_factory=list)
    applications: list[Application] = field(default_factory=list)
    next_application_number: int = 1

    def __post_init__(self) -> None:
        self._counter = itertools.count(self.next_application_number)

    @classmethod
    def seeded(cls) -> "InMemoryStore":
        """Build a store loaded with the mock reference data."""
        applications = initial_applications()
        return cls(
            products=initial_products(),
            groups=initial_groups(),
            applications=applications,
            next_application_number=len(applications) + 1,
        )

    def next_application_id(self) -> str:
        return f"sub-{next(self._counter)}"

    def stats(self) -> dict[str, int]:
        return {
            "products": len(self.products),
            "groups": len(self.groups),
            "applications": len(self.applications),
        }


store = InMemoryStore.seeded()


def get_store() -> InMemoryStore:
    """Get the process-wide store.

    Intended for use with FastAPI's Depends; tests override it with a fresh
    store through ``app.dependency_overrides``.

    Example:
        ```python
        @app.get("/groups")
        def list_groups(store: InMemoryStore = Depends(get_store)):
            return store.groups
        ```
    """
    return store


def check_store() -> bool:
    """Check that the store is loaded.

    Returns:
        bool: True when the product catalog is non-empty.
    """
    return bool(store.products)
