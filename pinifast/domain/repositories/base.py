"""
Base Repository Interface.
Defines the standard contract for data access operations.
"""

from typing import Any, List, Mapping, Optional, Protocol, TypeVar

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for generic CRUD operations over one entity table."""

    def find_all(self) -> List[T]:
        """Return every row."""
        ...

    def find_by_id(self, id: str) -> Optional[T]:
        """Get a single entity by ID."""
        ...

    def find_one(self, **criteria: Any) -> Optional[T]:
        """First entity matching all of the given field values."""
        ...

    def find_by_query(self, **criteria: Any) -> List[T]:
        """All entities matching all of the given field values."""
        ...

    def count(self, **criteria: Any) -> int:
        ...

    def create(self, data: Mapping[str, Any]) -> T:
        """Persist a new entity with a fresh id and timestamps."""
        ...

    def update(self, id: str, data: Mapping[str, Any]) -> Optional[T]:
        """Merge fields into an entity; None when the id is unknown."""
        ...

    def delete(self, id: str) -> bool:
        """Delete an entity by ID, reporting whether a row was removed."""
        ...
