from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


class RecordStore(ABC, Generic[T]):
    """Ordered collection of records keyed by their string ``id``.

    Records are kept newest-insert first. Every read returns copies, so
    mutating a returned record never affects the store.
    """

    @abstractmethod
    def list(self) -> List[T]:
        """Snapshot of all records in store order."""
        pass

    @abstractmethod
    def get(self, record_id: str) -> Optional[T]:
        """Get a record by id, or None if absent."""
        pass

    @abstractmethod
    def insert_front(self, record: T) -> None:
        """Add a new record at the front. Raises DuplicateIdError on id collision."""
        pass

    @abstractmethod
    def replace(self, record: T) -> None:
        """Replace the record with the same id. Raises NotFoundError if absent."""
        pass

    @abstractmethod
    def find(self, filters: Dict[str, Any]) -> List[T]:
        """Records whose fields equal every value in filters, in store order."""
        pass

    @abstractmethod
    def update_many(self, filters: Dict[str, Any], changes: Dict[str, Any]) -> int:
        """Set fields on every matching record and return the matched count."""
        pass

    @abstractmethod
    def count(self, filters: Dict[str, Any]) -> int:
        """Count records matching filters."""
        pass
