"""
Base repository class for in-memory collections.
Provides common lookup and mutation patterns for the store's lists.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from app.core.store import InMemoryStore

# Type variable for entity classes
EntityType = TypeVar("EntityType")


class BaseRepository(Generic[EntityType], ABC):
    """
    Base repository over one ordered list held by the store.
    All list-backed repositories should inherit from this class.
    """

    def __init__(self, store: InMemoryStore):
        """
        Initialize repository with the shared store.

        Args:
            store: In-memory application state
        """
        self.store = store

    @property
    @abstractmethod
    def items(self) -> list[EntityType]:
        """The backing list, in display order."""

    def get_by_id(self, id_value: str) -> EntityType | None:
        """
        Get a single record by ID.

        Args:
            id_value: The ID value to search for

        Returns:
            Entity instance or None if not found
        """
        return next((item for item in self.items if item.id == id_value), None)

    def get_all(
        self, limit: int | None = None, offset: int | None = None
    ) -> list[EntityType]:
        """
        Get all records with optional pagination.

        Args:
            limit: Maximum number of records to return
            offset: Number of records to skip

        Returns:
            List of entity instances
        """
        start = offset or 0
        end = start + limit if limit else None
        return self.items[start:end]

    def add(self, instance: EntityType) -> EntityType:
        """
        Insert a record at the head of the list.

        Args:
            instance: Entity to store

        Returns:
            The stored instance
        """
        self.items.insert(0, instance)
        return instance

    def delete(self, id_value: str) -> bool:
        """
        Delete a record by ID.

        Args:
            id_value: ID of the record to delete

        Returns:
            True if deleted, False if not found
        """
        instance = self.get_by_id(id_value)
        if instance is None:
            return False
        self.items.remove(instance)
        return True

    def count(self) -> int:
        return len(self.items)
